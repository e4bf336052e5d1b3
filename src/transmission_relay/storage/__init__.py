"""Persistence for the current issue document."""

from .store import PLACEHOLDER_DOCUMENT, DocumentStore, FileDocumentStore

__all__ = [
    "PLACEHOLDER_DOCUMENT",
    "DocumentStore",
    "FileDocumentStore",
]
