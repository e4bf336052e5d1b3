"""Style override application onto the active presentation.

Overrides are CSS custom properties (``--name: value``) set on the page
root. They accumulate: applying a new set never clears variables set by
an earlier one, so a variable omitted by a later document keeps its old
value until ``Presentation.reset`` is called.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

CUSTOM_PROPERTY_PREFIX = "--"


@dataclass
class Presentation:
    """Custom properties currently applied to the page root.

    Attributes:
        custom_properties: CSS custom property name to value
    """

    custom_properties: dict[str, str] = field(default_factory=dict)

    def set_property(self, name: str, value: str) -> None:
        self.custom_properties[name] = value

    def reset(self) -> None:
        """Drop every applied custom property."""
        self.custom_properties.clear()

    def root_style(self) -> str:
        """Return the properties as an inline style declaration list."""
        return "; ".join(
            f"{name}: {value}" for name, value in self.custom_properties.items()
        )


class StyleOverrideApplier:
    """Apply style override mappings onto a Presentation.

    Attributes:
        presentation: The presentation that receives overrides
    """

    def __init__(self, presentation: Presentation | None = None):
        self.presentation = presentation or Presentation()

    def apply(self, overrides: Any) -> int:
        """Apply each valid override, skipping malformed entries.

        An entry is valid when its key is a string starting with ``--``
        and its value is a string. Absent overrides are a no-op.

        Args:
            overrides: Mapping of custom property name to value, or None

        Returns:
            Number of overrides applied
        """
        if overrides is None:
            return 0
        if not isinstance(overrides, dict):
            logger.warning(f"Received invalid styleOverrides data: {overrides!r}")
            return 0

        applied = 0
        for name, value in overrides.items():
            if (
                isinstance(name, str)
                and name.startswith(CUSTOM_PROPERTY_PREFIX)
                and isinstance(value, str)
            ):
                self.presentation.set_property(name, value)
                applied += 1
            else:
                logger.warning(f"Skipping invalid style override: {name}: {value!r}")

        logger.debug(f"Applied {applied} of {len(overrides)} style overrides")
        return applied
