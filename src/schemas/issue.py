"""Issue document schemas.

An issue document is the single persisted JSON payload describing one
full magazine cycle. It is replaced wholesale on every accepted upload:

    {
        "cycleNumber": 7,
        "transmissionDate": "CYCLE 7 :: 2026-10-19",
        "layoutConfiguration": {
            "templateName": "standard-grid",
            "featuredVisualTargetId": "dir-1",
            "moduleOrder": ["dir-1", "art-2"]
        },
        "mainContent": [{"id": "dir-1", "type": "directive", ...}, ...],
        "footerMantra": "// END TRANSMISSION //",
        "styleOverrides": {"--accent-color": "#0ff"}
    }

By default the models are lenient: a display field holding something
that is neither a string nor a number reads as missing, so a renderer
always gets a usable document. Validating with ``UPLOAD_CONTEXT`` keeps
such values so that pydantic rejects them, which is how the document
validator enforces field types at upload time.
"""

from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator

REQUIRED_KEYS = (
    "cycleNumber",
    "transmissionDate",
    "layoutConfiguration",
    "mainContent",
    "footerMantra",
    "styleOverrides",
)

UPLOAD_CONTEXT = {"strict": True}


def _display_value(value: Any, info: ValidationInfo) -> Any:
    """Map a value that cannot be displayed to None outside strict mode."""
    if info.context and info.context.get("strict"):
        return value
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    return value


class LayoutConfiguration(BaseModel):
    """Display layout for an issue.

    Attributes:
        template_name: Layout template applied to the page body
        featured_visual_target_id: Module id given emphasized visual focus
        module_order: Explicit display order of module ids
    """

    template_name: str | None = Field(default=None, alias="templateName")
    featured_visual_target_id: str | None = Field(
        default=None, alias="featuredVisualTargetId"
    )
    module_order: list[Any] | None = Field(default=None, alias="moduleOrder")

    model_config = {
        "extra": "allow",
        "populate_by_name": True,
        "coerce_numbers_to_str": True,
    }

    @field_validator("template_name", "featured_visual_target_id", mode="before")
    @classmethod
    def _displayable(cls, value: Any, info: ValidationInfo) -> Any:
        return _display_value(value, info)

    @field_validator("module_order", mode="before")
    @classmethod
    def _order_must_be_list(cls, value: Any) -> Any:
        return value if isinstance(value, list) else None


class IssueDocument(BaseModel):
    """A full magazine cycle as read by the renderer.

    Attributes:
        cycle_number: Issue cycle number (monotonic by convention only)
        transmission_date: Opaque display string
        layout_configuration: Layout template, featured target and order
        main_content: Raw content module entries, in document order
        footer_mantra: Opaque display string
        style_overrides: CSS custom property overrides (raw, unchecked)
    """

    cycle_number: int | str | None = Field(default=None, alias="cycleNumber")
    transmission_date: str | None = Field(default=None, alias="transmissionDate")
    layout_configuration: LayoutConfiguration = Field(
        default_factory=LayoutConfiguration, alias="layoutConfiguration"
    )
    main_content: list[Any] = Field(default_factory=list, alias="mainContent")
    footer_mantra: str | None = Field(default=None, alias="footerMantra")
    style_overrides: Any = Field(default=None, alias="styleOverrides")

    model_config = {
        "extra": "allow",
        "populate_by_name": True,
        "coerce_numbers_to_str": True,
    }

    @field_validator(
        "cycle_number", "transmission_date", "footer_mantra", mode="before"
    )
    @classmethod
    def _displayable(cls, value: Any, info: ValidationInfo) -> Any:
        return _display_value(value, info)

    @field_validator("layout_configuration", mode="before")
    @classmethod
    def _layout_must_be_mapping(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else {}

    @field_validator("main_content", mode="before")
    @classmethod
    def _content_must_be_list(cls, value: Any) -> Any:
        return value if isinstance(value, list) else []

    @property
    def featured_target(self) -> str | None:
        return self.layout_configuration.featured_visual_target_id

    @property
    def module_order(self) -> list[Any] | None:
        return self.layout_configuration.module_order
