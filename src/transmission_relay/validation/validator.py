"""Document validator gating uploads of new issue documents.

A candidate document is accepted or rejected as a whole. Checks run in
order and stop at the first failure:

1. The payload must parse as JSON (MalformedPayload)
2. The parsed value must be an object holding every required key, with
   mainContent as a list (MalformedDocument)
3. Every mainContent entry must be an object with a non-empty id and
   type (MalformedModule)

A featured target that names no module is only a warning.
"""

import json
import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from schemas.issue import REQUIRED_KEYS, UPLOAD_CONTEXT, IssueDocument
from transmission_relay.exceptions import (
    MalformedDocument,
    MalformedModule,
    MalformedPayload,
)

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    """Refuse NaN and Infinity, which json.loads accepts but JSON does not."""
    raise ValueError(f"Invalid JSON constant: {name}")


def _field_path(loc: tuple) -> str:
    """Name the document field an error location points at.

    Union members add a trailing type tag to the location, so only the
    field part is kept: one level deep, two inside layoutConfiguration.
    """
    depth = 2 if loc and loc[0] == "layoutConfiguration" else 1
    return ".".join(str(part) for part in loc[:depth])


class DocumentValidator:
    """Validate candidate issue documents before they become current.

    Example:
        validator = DocumentValidator()
        document = validator.validate_bytes(upload.read())
        store.replace(document)
    """

    def validate_bytes(self, payload: bytes) -> dict[str, Any]:
        """Parse and validate an uploaded payload.

        Args:
            payload: Raw uploaded bytes

        Returns:
            The accepted document, exactly as parsed

        Raises:
            MalformedPayload: If the bytes are not UTF-8 encoded JSON
            MalformedDocument: If required keys are missing
            MalformedModule: If any mainContent entry lacks an id or type
        """
        try:
            data = json.loads(payload.decode("utf-8"), parse_constant=_reject_constant)
        except ValueError as e:
            logger.warning(f"Rejected payload that is not valid JSON: {e}")
            raise MalformedPayload(errors=[str(e)]) from e

        return self.validate(data)

    def validate(self, data: Any) -> dict[str, Any]:
        """Validate an already-parsed candidate document.

        Args:
            data: Parsed JSON value

        Returns:
            The accepted document

        Raises:
            MalformedDocument: If required keys are missing or malformed
            MalformedModule: If any mainContent entry lacks an id or type
        """
        if not isinstance(data, dict):
            raise MalformedDocument(
                "Invalid JSON structure: document must be an object."
            )

        missing = [key for key in REQUIRED_KEYS if key not in data]
        if missing:
            raise MalformedDocument(
                f"Invalid JSON structure: Missing required keys: {', '.join(missing)}.",
                errors=missing,
            )

        if not isinstance(data["mainContent"], list):
            raise MalformedDocument(
                "Invalid JSON structure: mainContent must be a list."
            )

        for index, item in enumerate(data["mainContent"]):
            if not isinstance(item, dict) or not item.get("id") or not item.get("type"):
                raise MalformedModule(
                    'Invalid JSON: mainContent items require "id" and "type" '
                    f"(item {index}).",
                    index=index,
                )

        try:
            IssueDocument.model_validate(data, context=UPLOAD_CONTEXT)
        except PydanticValidationError as e:
            fields = sorted({_field_path(err["loc"]) for err in e.errors()})
            raise MalformedDocument(
                f"Invalid JSON structure: unexpected type for {', '.join(fields)}.",
                errors=fields,
            ) from e

        for warning in self.warnings(data):
            logger.warning(f"Warning: {warning}")

        return data

    def warnings(self, data: dict[str, Any]) -> list[str]:
        """Collect non-fatal problems in an otherwise valid document.

        Args:
            data: A document that passed validation

        Returns:
            Human-readable warnings (empty if none)
        """
        warnings: list[str] = []

        layout = data.get("layoutConfiguration")
        if not isinstance(layout, dict):
            return warnings

        target = layout.get("featuredVisualTargetId")
        if target:
            module_ids = [
                item.get("id")
                for item in data.get("mainContent", [])
                if isinstance(item, dict)
            ]
            if target not in module_ids:
                warnings.append(
                    f'featuredVisualTargetId "{target}" not found in mainContent.'
                )

        return warnings
