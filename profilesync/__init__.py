"""CSV profile ingestion and active-profile synchronization."""

__version__ = "1.0.0"
