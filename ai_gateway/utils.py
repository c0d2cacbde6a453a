"""
Utility functions for the AI gateway.

Provides common functionality for:
- API key masking (wire and log forms)
- Optional text normalization
- Timing helpers
"""
from __future__ import annotations

import time

# Placeholder the CRM frontend shows (and sends back) instead of a stored key
MASKED_API_KEY = "********"


# =============================================================================
# API Key Helpers
# =============================================================================

def is_masked_or_empty(api_key: str | None) -> bool:
    """
    Check whether a submitted key means "use the stored key".

    The frontend echoes ``MASKED_API_KEY`` back when the tenant did not
    retype their key; an absent or empty key means the same. Whitespace
    is a key like any other and is passed through to the provider.
    """
    return api_key is None or api_key == "" or api_key == MASKED_API_KEY


def key_hint(api_key: str | None) -> str:
    """
    Get a log-safe hint for an API key.

    Returns:
        "...abcd" for keys long enough to hint at, "<empty>" otherwise
    """
    if not api_key:
        return "<empty>"
    if len(api_key) < 8:
        return "..."
    return f"...{api_key[-4:]}"


# =============================================================================
# Text Helpers
# =============================================================================

def clean_optional_text(value: str | None) -> str | None:
    """
    Normalize an optional free-text field.

    Returns:
        None when the value is absent or whitespace only, else the value
        unchanged (inner formatting of prompts is preserved)
    """
    if value is None:
        return None
    if not value.strip():
        return None
    return value


def elapsed_ms(start: float) -> float:
    """Milliseconds elapsed since a ``time.perf_counter()`` reading."""
    return (time.perf_counter() - start) * 1000
