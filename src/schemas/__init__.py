"""Schema definitions for transmission-relay."""

from .issue import REQUIRED_KEYS, UPLOAD_CONTEXT, IssueDocument, LayoutConfiguration
from .modules import (
    MODULE_TYPES,
    ArticleModule,
    CipherModule,
    ContentModule,
    DirectiveModule,
    LetterModule,
    UnknownModule,
    parse_module,
)

__all__ = [
    "REQUIRED_KEYS",
    "UPLOAD_CONTEXT",
    "IssueDocument",
    "LayoutConfiguration",
    "MODULE_TYPES",
    "ArticleModule",
    "CipherModule",
    "ContentModule",
    "DirectiveModule",
    "LetterModule",
    "UnknownModule",
    "parse_module",
]
