"""Module renderer mapping content modules to HTML sections.

Each module type has a fixed title fallback and set of decorative flags.
Module ``content`` is trusted markup and is inserted without escaping;
uploads are operator-controlled and form the only trust boundary. All
other text (titles, senders, hints, diagnostic dumps) is escaped.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from schemas.modules import (
    ArticleModule,
    CipherModule,
    ContentModule,
    DirectiveModule,
    LetterModule,
    UnknownModule,
    parse_module,
)

from .filters import FILTERS, pretty_json

logger = logging.getLogger(__name__)

# Resolve the project root (4 levels up from this file):
#   renderer.py → rendering/ → transmission_relay/ → src/ → project root
# If this file is ever moved, the chain of .parent calls must be updated.
PACKAGE_ROOT = Path(__file__).parent.parent.parent.parent
TEMPLATES_DIR = PACKAGE_ROOT / "resources" / "templates"
STYLESHEETS_DIR = PACKAGE_ROOT / "resources" / "stylesheets"

DEFAULT_ENTRANCE_DELAY = "0.1s"


def load_stylesheet(name: str, stylesheets_dir: Path | None = None) -> str:
    """Return a stylesheet's text, or an empty string if it is missing."""
    path = (stylesheets_dir or STYLESHEETS_DIR) / name
    if not path.exists():
        logger.debug(f"Stylesheet not found: {path}")
        return ""
    return path.read_text(encoding="utf-8")


def create_environment(templates_dir: Path | None = None) -> Environment:
    """Build the Jinja2 environment shared by all templates."""
    env = Environment(
        loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
        autoescape=True,
    )
    for name, func in FILTERS.items():
        env.filters[name] = func
    return env


@dataclass
class RenderedModule:
    """Visual representation of one content module.

    Attributes:
        module_id: Id of the source module
        module_type: Declared type of the source module
        title: Section title (plain text, escaped on output)
        body: Section body markup
        holographic: Draw the holographic panel decoration
        small: Use the compact panel variant
        featured: Module is the featured visual target
        delay: CSS expression for the staggered entrance animation
    """

    module_id: str
    module_type: str
    title: str
    body: Markup
    holographic: bool = False
    small: bool = False
    featured: bool = False
    delay: str = ""

    @property
    def css_classes(self) -> str:
        classes = ["content-module", f"{self.module_type}-module", "animate-entrance"]
        if self.holographic:
            classes.append("holographic-panel")
        if self.small:
            classes.append("small-module")
        if self.featured:
            classes.append("has-visual-focus")
        return " ".join(classes)


class ModuleRenderer:
    """Render content modules to RenderedModule values and HTML.

    Rendering is a pure function of the module, its position and whether
    it is featured. It never raises for missing optional fields: absent
    content becomes a corrupted-content placeholder.

    Attributes:
        template_name: Name of the Jinja2 template for a single module
        entrance_delay: Base delay unit for the entrance animation
    """

    def __init__(
        self,
        template_name: str = "module.html.j2",
        templates_dir: Path | None = None,
        entrance_delay: str = DEFAULT_ENTRANCE_DELAY,
    ):
        self.template_name = template_name
        self.entrance_delay = entrance_delay
        self._env = create_environment(templates_dir)
        self._handlers: dict[type, Callable[[Any], tuple[str, Markup, bool, bool]]] = {
            DirectiveModule: self._render_directive,
            ArticleModule: self._render_article,
            LetterModule: self._render_letter,
            CipherModule: self._render_cipher,
        }

    def render(
        self,
        module: ContentModule | dict[str, Any],
        position_index: int,
        featured: bool = False,
    ) -> RenderedModule:
        """Render a module at a given display position.

        Args:
            module: Typed module, or a raw entry with an id and a type
            position_index: Zero-based display position
            featured: Whether the module is the featured visual target

        Returns:
            The rendered module
        """
        if isinstance(module, dict):
            module = parse_module(module)

        handler = self._handlers.get(type(module), self._render_unknown)
        title, body, holographic, small = handler(module)

        return RenderedModule(
            module_id=module.id,
            module_type=module.type,
            title=title,
            body=body,
            holographic=holographic,
            small=small,
            featured=featured,
            delay=self.entrance_delay_for(position_index),
        )

    def entrance_delay_for(self, position_index: int) -> str:
        """Return the staggered entrance delay for a display position."""
        return f"calc(var(--entrance-delay, {self.entrance_delay}) * {position_index + 1})"

    def to_html(self, rendered: RenderedModule) -> str:
        """Render a RenderedModule as an HTML section."""
        template = self._env.get_template(self.template_name)
        return template.render(module=rendered)

    def _render_directive(self, module: DirectiveModule) -> tuple[str, Markup, bool, bool]:
        title = module.title or "// DIRECTIVE //"
        body = Markup(module.content or "<p>[Directive Content Corrupted]</p>")
        return title, body, True, False

    def _render_article(self, module: ArticleModule) -> tuple[str, Markup, bool, bool]:
        title = module.title or "// ARCHIVE ENTRY //"
        body = Markup(module.content or "<p>[Article Content Corrupted]</p>")
        return title, body, False, False

    def _render_letter(self, module: LetterModule) -> tuple[str, Markup, bool, bool]:
        title = f"// FROM: {module.sender or 'UNKNOWN SOURCE'} //"
        body = Markup(module.content or "<p>[Letter Content Corrupted]</p>")
        return title, body, False, False

    def _render_cipher(self, module: CipherModule) -> tuple[str, Markup, bool, bool]:
        title = module.title or "// ENCRYPTED FRAGMENT //"
        body = Markup('<div class="cipher-text">{}</div>').format(
            Markup(module.content or "[Cipher Corrupted]")
        )
        if module.decryption_hint:
            body += Markup('<p class="cipher-hint">Hint: {}</p>').format(
                module.decryption_hint
            )
        return title, body, True, True

    def _render_unknown(self, module: ContentModule) -> tuple[str, Markup, bool, bool]:
        logger.warning(
            f"Rendering unknown content type: {module.type} for ID: {module.id}"
        )
        raw = module.raw if isinstance(module, UnknownModule) else module.model_dump()
        title = f"// UNKNOWN DATA TYPE: {module.type} //"
        body = Markup("<p>Unrecognized content format.</p><pre>{}</pre>").format(
            pretty_json(raw)
        )
        return title, body, False, False
