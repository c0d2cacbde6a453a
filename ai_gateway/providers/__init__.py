"""
Provider layer for swappable implementations.

Each provider type has an abstract interface that concrete implementations
must satisfy.

Directory Structure:
    providers/
    ├── __init__.py              # This file
    ├── llm/                     # Vendor text generation adapters
    │   ├── __init__.py          # Registry - ProviderKind -> TextGenerator
    │   ├── interface.py         # Abstract interface all adapters implement
    │   ├── gemini_impl.py       # Gemini (google-genai)
    │   ├── openai_impl.py       # OpenAI (openai)
    │   ├── anthropic_impl.py    # Anthropic (anthropic)
    │   └── catalog.py           # Static list of offered models
    └── settings_store/          # Tenant AI settings storage
        ├── __init__.py          # Factory - selects store from config
        ├── interface.py         # Abstract interface
        ├── firestore_impl.py    # Firestore implementation
        └── memory_impl.py       # In-memory implementation
"""

__all__ = []
