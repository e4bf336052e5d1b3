"""Client for the transmission relay HTTP API."""

import json
from pathlib import Path
from typing import Any

from transmission_relay.exceptions import MalformedPayload

from .client import Client


class RelayClient(Client):
    """Client for fetching and uploading issue documents.

    Example:
        config = {"base_url": "http://localhost:8080"}
        with RelayClient(config) as client:
            document = client.fetch()
    """

    DATA_PATH = "/api/current-data"
    UPLOAD_PATH = "/upload"
    UPLOAD_FIELD = "magazineDataFile"

    def fetch(self) -> Any:
        """Fetch the current issue document.

        Returns:
            The parsed JSON body. No shape checks are made here.

        Raises:
            MalformedPayload: If the body is not valid JSON
            NotFoundError: If the server has no current document
            APIError: If the server returns another non-2xx response
            NetworkFailure: If the network connection fails
        """
        response = self.get(self.DATA_PATH)
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedPayload(
                "Invalid JSON received from API.", errors=[str(e)]
            ) from e

    def upload(self, path: Path) -> dict[str, Any]:
        """Upload a JSON file as the new current issue document.

        Args:
            path: Path to the JSON document

        Returns:
            The server's JSON reply ({"success": ..., "message": ...})

        Raises:
            APIError: If the server rejects the upload
            NetworkFailure: If the network connection fails
        """
        files = {
            self.UPLOAD_FIELD: (path.name, path.read_bytes(), "application/json"),
        }
        response = self.post(self.UPLOAD_PATH, files=files)
        return response.json()
