"""Sources the transmission controller can fetch issue documents from."""

import json
from abc import ABC, abstractmethod
from typing import Any

from transmission_relay.clients import RelayClient
from transmission_relay.exceptions import MalformedPayload
from transmission_relay.storage import DocumentStore


class DocumentSource(ABC):
    """Abstract base class for issue document sources."""

    @abstractmethod
    def fetch(self) -> Any:
        """Return the current document as a parsed JSON value."""
        pass


class HttpDocumentSource(DocumentSource):
    """Fetch the current document from a relay server over HTTP."""

    def __init__(self, client: RelayClient):
        self.client = client

    def fetch(self) -> Any:
        return self.client.fetch()


class StoreDocumentSource(DocumentSource):
    """Read the current document directly from a document store."""

    def __init__(self, store: DocumentStore):
        self.store = store

    def fetch(self) -> Any:
        payload = self.store.read_bytes()
        try:
            return json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedPayload(
                "Stored magazine data is not valid JSON.", errors=[str(e)]
            ) from e
