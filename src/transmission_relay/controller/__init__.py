"""Orchestration of the issue rendering cycle."""

from .sources import DocumentSource, HttpDocumentSource, StoreDocumentSource
from .transmission import (
    TransmissionController,
    TransmissionPage,
    TransmissionState,
)

__all__ = [
    "DocumentSource",
    "HttpDocumentSource",
    "StoreDocumentSource",
    "TransmissionController",
    "TransmissionPage",
    "TransmissionState",
]
