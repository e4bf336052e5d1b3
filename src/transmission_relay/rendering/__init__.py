"""Reconciliation, rendering and styling of issue content."""

from .reconciler import is_renderable, reconcile
from .renderer import ModuleRenderer, RenderedModule, create_environment, load_stylesheet
from .styles import Presentation, StyleOverrideApplier

__all__ = [
    "is_renderable",
    "reconcile",
    "ModuleRenderer",
    "RenderedModule",
    "create_environment",
    "load_stylesheet",
    "Presentation",
    "StyleOverrideApplier",
]
