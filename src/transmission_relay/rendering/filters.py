"""Jinja2 filters for page and module templates."""

import json
from typing import Any


def pretty_json(value: Any) -> str:
    """Serialize a value as indented JSON for diagnostic dumps.

    Values that JSON cannot represent are stringified rather than raising.

    Examples:
        >>> pretty_json({"id": "x"})
        '{\\n  "id": "x"\\n}'
    """
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def display_text(value: Any) -> str:
    """Render an opaque display field, mapping None to an empty string.

    Examples:
        >>> display_text(None)
        ''
        >>> display_text(7)
        '7'
    """
    if value is None:
        return ""
    return str(value)


# Registry of all filters for easy registration with Jinja2
FILTERS = {
    "pretty_json": pretty_json,
    "display_text": display_text,
}
