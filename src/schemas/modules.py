"""Content module schemas.

Content modules form a tagged union on their ``type`` field. Each known
type has its own variant; anything else is carried by UnknownModule
together with the raw payload so it can be dumped for diagnosis.
"""

import logging
from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

logger = logging.getLogger(__name__)


class ContentModule(BaseModel):
    """Fields shared by every content module.

    Attributes:
        id: Module identifier, unique within a document by convention
        type: Declared module type
        title: Optional display title
        content: Pre-rendered markup fragment, trusted verbatim
    """

    id: str
    type: str
    title: str | None = None
    content: str | None = None

    model_config = {"extra": "allow", "coerce_numbers_to_str": True}


class DirectiveModule(ContentModule):
    """An operational directive, shown on a holographic panel."""

    type: Literal["directive"] = "directive"


class ArticleModule(ContentModule):
    """A plain archive article."""

    type: Literal["article"] = "article"


class LetterModule(ContentModule):
    """A letter attributed to a sender."""

    type: Literal["letter"] = "letter"
    sender: str | None = None


class CipherModule(ContentModule):
    """An encrypted fragment with an optional decryption hint."""

    type: Literal["cipher"] = "cipher"
    decryption_hint: str | None = Field(default=None, alias="decryptionHint")

    model_config = {
        "extra": "allow",
        "coerce_numbers_to_str": True,
        "populate_by_name": True,
    }


class UnknownModule(ContentModule):
    """Fallback variant for unrecognized types.

    Attributes:
        raw: The module exactly as it appeared in the document
    """

    raw: dict[str, Any] = Field(default_factory=dict)


MODULE_TYPES: dict[str, type[ContentModule]] = {
    "directive": DirectiveModule,
    "article": ArticleModule,
    "letter": LetterModule,
    "cipher": CipherModule,
}


def parse_module(data: dict[str, Any]) -> ContentModule:
    """Select and build the variant for a raw module entry.

    Entries whose type is unknown, or whose optional fields do not fit
    their variant, become an UnknownModule carrying the raw entry.

    Args:
        data: Raw module dict with at least an ``id`` and a ``type``

    Returns:
        The typed module variant
    """
    module_id = str(data.get("id"))
    module_type = str(data.get("type"))
    variant = MODULE_TYPES.get(module_type)

    if variant is not None:
        try:
            return variant.model_validate(data)
        except PydanticValidationError as e:
            logger.warning(
                f"Module {module_id} does not fit type '{module_type}': "
                f"{e.error_count()} field error(s)"
            )

    return UnknownModule(id=module_id, type=module_type, raw=dict(data))
