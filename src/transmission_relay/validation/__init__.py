"""Upload-time validation of issue documents."""

from .validator import DocumentValidator

__all__ = ["DocumentValidator"]
