"""Document store for the single current issue document.

Exactly one issue document is current at any time. Writers overwrite it
wholesale and readers stream it verbatim. There is no locking, so a reader
racing a concurrent upload may observe a partially written file.
"""

import copy
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from transmission_relay.exceptions import IOFailure, StoreUnavailable

logger = logging.getLogger(__name__)

PLACEHOLDER_DOCUMENT: dict[str, Any] = {
    "cycleNumber": 0,
    "transmissionDate": "INITIALIZING :: STANDBY",
    "layoutConfiguration": {
        "templateName": "standard-grid",
        "featuredVisualTargetId": "init-directive",
        "moduleOrder": ["init-directive"],
    },
    "mainContent": [
        {
            "type": "directive",
            "id": "init-directive",
            "title": "// STANDBY :: AWAITING TRANSMISSION //",
            "content": (
                "<p>Channel open. Awaiting first operational directive "
                "from Central Command...</p>"
            ),
        }
    ],
    "footerMantra": "// SYSTEM ONLINE :: AWAITING SIGNAL //",
    "styleOverrides": {},
}


class DocumentStore(ABC):
    """Abstract read/replace access to the current issue document."""

    @abstractmethod
    def exists(self) -> bool:
        """Return True if a current document is persisted."""
        pass

    @abstractmethod
    def read_bytes(self) -> bytes:
        """Return the persisted document exactly as stored.

        Raises:
            StoreUnavailable: If no document is persisted
            IOFailure: If the document cannot be read
        """
        pass

    @abstractmethod
    def replace(self, document: dict[str, Any]) -> None:
        """Overwrite the current document with a new one.

        Raises:
            IOFailure: If the document cannot be written
        """
        pass

    def read(self) -> Any:
        """Return the persisted document parsed from JSON."""
        return json.loads(self.read_bytes())


class FileDocumentStore(DocumentStore):
    """Store the current document as a pretty-printed JSON file.

    Attributes:
        path: Location of the document file
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def ensure_initialized(self) -> bool:
        """Create the data directory and placeholder document if absent.

        Returns:
            True if a placeholder document was written

        Raises:
            IOFailure: If the directory or placeholder cannot be created
        """
        data_dir = self.path.parent
        if not data_dir.exists():
            try:
                data_dir.mkdir(parents=True)
            except OSError as e:
                raise IOFailure(f"Cannot create data directory {data_dir}: {e}") from e
            logger.info(f"Created data directory: {data_dir}")

        if self.exists():
            return False

        self.replace(copy.deepcopy(PLACEHOLDER_DOCUMENT))
        logger.info(f"Created initial data file: {self.path}")
        return True

    def read_bytes(self) -> bytes:
        if not self.exists():
            logger.error(f"Data file not found at {self.path}")
            raise StoreUnavailable()
        try:
            return self.path.read_bytes()
        except OSError as e:
            logger.error(f"Error reading data file {self.path}: {e}")
            raise IOFailure("Error retrieving magazine data.") from e

    def replace(self, document: dict[str, Any]) -> None:
        try:
            text = json.dumps(document, indent=2, ensure_ascii=False, allow_nan=False)
        except ValueError as e:
            raise IOFailure(f"Cannot serialize document: {e}") from e
        try:
            self.path.write_text(text, encoding="utf-8")
        except OSError as e:
            logger.error(f"Error writing data file {self.path}: {e}")
            raise IOFailure(f"Cannot write data file: {e}") from e
        logger.debug(f"Wrote {len(text)} characters to {self.path}")
