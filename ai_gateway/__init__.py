"""Provider-agnostic AI request gateway for the multi-tenant CRM."""

__version__ = "1.0.0"
