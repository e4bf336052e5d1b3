"""Transmission controller: fetch, reconcile, render and style an issue.

A run moves through IDLE → FETCHING and ends in either RENDERED or
ERROR_DISPLAYED. Whatever the outcome, the page's loading flag is
cleared once the run finishes. Any failure replaces the main content
with a single error panel; a partially valid document is never
partially shown.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any

from schemas.issue import IssueDocument
from transmission_relay.exceptions import UnexpectedShape
from transmission_relay.rendering import (
    ModuleRenderer,
    RenderedModule,
    StyleOverrideApplier,
    create_environment,
    is_renderable,
    reconcile,
)
from transmission_relay.rendering.renderer import load_stylesheet

from .sources import DocumentSource

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_NAME = "standard-grid"
EMPTY_CONTENT_NOTICE = "No content received in this transmission cycle."
DEFAULT_ERROR_MESSAGE = "Signal lost."


class TransmissionState(str, Enum):
    """States of a single controller run."""

    IDLE = "idle"
    FETCHING = "fetching"
    RENDERED = "rendered"
    ERROR_DISPLAYED = "error_displayed"


@dataclass
class TransmissionPage:
    """Everything the page template needs to draw one issue.

    Attributes:
        cycle_number: Issue cycle number for the header
        transmission_date: Display date for the header
        footer_mantra: Footer text
        year: Current year for the footer
        template_name: Layout template, applied as the body class
        modules: Rendered modules in display order
        notice: Message shown when no module could be rendered
        error: Failure message shown in the error panel
        loading: Page is still waiting on a run to finish
        ready: Page has finished a run
        root_style: Inline custom properties for the document root
    """

    cycle_number: str = ""
    transmission_date: str = ""
    footer_mantra: str = ""
    year: int = field(default_factory=lambda: date.today().year)
    template_name: str = DEFAULT_TEMPLATE_NAME
    modules: list[RenderedModule] = field(default_factory=list)
    notice: str | None = None
    error: str | None = None
    loading: bool = True
    ready: bool = False
    root_style: str = ""


class TransmissionController:
    """Drive one fetch-and-render cycle of the issue renderer.

    The style applier persists across runs of the same controller, so
    style overrides from earlier documents carry over into later ones.

    Attributes:
        source: Where issue documents are fetched from
        renderer: Renderer for individual modules
        styles: Applier holding the accumulated presentation
        state: State of the most recent run
    """

    def __init__(
        self,
        source: DocumentSource,
        renderer: ModuleRenderer | None = None,
        styles: StyleOverrideApplier | None = None,
        page_template: str = "page.html.j2",
        stylesheet_name: str = "magazine.css",
        templates_dir: Path | None = None,
        stylesheets_dir: Path | None = None,
        default_template_name: str = DEFAULT_TEMPLATE_NAME,
    ):
        self.source = source
        self.renderer = renderer or ModuleRenderer(templates_dir=templates_dir)
        self.styles = styles or StyleOverrideApplier()
        self.page_template = page_template
        self.stylesheet_name = stylesheet_name
        self.stylesheets_dir = stylesheets_dir
        self.default_template_name = default_template_name
        self.state = TransmissionState.IDLE
        self._env = create_environment(templates_dir)

    def run(self) -> TransmissionPage:
        """Fetch the current document and build the page for it.

        Returns:
            The page, holding either rendered modules or an error
        """
        page = TransmissionPage(template_name=self.default_template_name)
        self.state = TransmissionState.FETCHING

        try:
            data = self.source.fetch()
            if not isinstance(data, dict):
                raise UnexpectedShape()
            self._render_document(data, page)
            self.state = TransmissionState.RENDERED
        except Exception as e:
            message = str(e) or DEFAULT_ERROR_MESSAGE
            logger.error(f"Failed to fetch or parse magazine data: {message}")
            page.modules = []
            page.notice = None
            page.error = message
            self.state = TransmissionState.ERROR_DISPLAYED
        finally:
            page.root_style = self.styles.presentation.root_style()
            page.loading = False
            page.ready = True

        return page

    def render_html(self, page: TransmissionPage) -> str:
        """Render a page through the page template."""
        template = self._env.get_template(self.page_template)
        return template.render(
            page=page,
            modules_html=[self.renderer.to_html(module) for module in page.modules],
            stylesheet=load_stylesheet(self.stylesheet_name, self.stylesheets_dir),
        )

    def _render_document(self, data: dict[str, Any], page: TransmissionPage) -> None:
        """Fill a page from a parsed issue document."""
        document = IssueDocument.model_validate(data)
        logger.info(f"Rendering Cycle: {document.cycle_number}")

        page.cycle_number = "" if document.cycle_number is None else str(document.cycle_number)
        page.transmission_date = document.transmission_date or ""
        page.footer_mantra = document.footer_mantra or ""
        page.template_name = (
            document.layout_configuration.template_name or self.default_template_name
        )
        logger.debug(f"Applying layout template: {page.template_name}")

        featured = document.featured_target
        ordered = reconcile(document.main_content, document.module_order)

        for index, item in enumerate(ordered):
            if not is_renderable(item):
                logger.warning(f"Skipping invalid content item at index {index}: {item!r}")
                continue
            rendered = self.renderer.render(
                item, index, featured=featured is not None and str(item["id"]) == featured
            )
            page.modules.append(rendered)

        if not page.modules:
            logger.warning("No modules to render in mainContent.")
            page.notice = EMPTY_CONTENT_NOTICE

        self.styles.apply(document.style_overrides)
