"""Template engine and HTML-to-PDF converter.

Both sit behind small protocols so the renderer does not care which
library does the work:

    TemplateEngine.render(template_path, bindings) -> str
    PdfConverter.convert(html_path) -> bytes
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateError,
    TemplateNotFound,
    TemplateSyntaxError,
)

from src.contracts.template import MODES
from src.reports.errors import ConversionError, RenderError, TemplateResolutionError

log = logging.getLogger(__name__)


class TemplateEngine(Protocol):
    def render(self, template_path: Path, bindings: dict[str, Any]) -> str: ...


class PdfConverter(Protocol):
    def convert(self, html_path: Path) -> bytes: ...


# ═══════════════════════════════════════════════════════════════════════════
#  Jinja2
# ═══════════════════════════════════════════════════════════════════════════


class JinjaTemplateEngine:
    """Renders a template file with Jinja2.

    ``mode`` controls parsing: ``html`` and ``xml`` escape substituted
    values, ``text`` leaves them raw and trims whitespace around block
    tags.
    """

    def __init__(self, mode: str = "html") -> None:
        if mode not in MODES:
            raise ValueError(f"unknown template mode '{mode}'")
        self.mode = mode
        self._loaded: dict[Path, Template] = {}

    def _environment(self, directory: Path) -> Environment:
        text = self.mode == "text"
        return Environment(
            loader=FileSystemLoader(str(directory)),
            autoescape=not text,
            undefined=StrictUndefined,
            trim_blocks=text,
            lstrip_blocks=text,
            keep_trailing_newline=True,
        )

    def load(self, template_path: Path) -> Template:
        """Parse the entry file; repeated calls reuse the parsed template."""
        template_path = Path(template_path)
        cached = self._loaded.get(template_path)
        if cached is not None:
            return cached
        if not template_path.is_file():
            raise TemplateResolutionError(f"template not found: {template_path}")
        env = self._environment(template_path.parent)
        try:
            template = env.get_template(template_path.name)
        except TemplateNotFound as exc:
            raise TemplateResolutionError(f"template not found: {exc.name}") from exc
        except TemplateSyntaxError as exc:
            raise RenderError(
                f"{exc.filename or template_path}:{exc.lineno}: {exc.message}"
            ) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise TemplateResolutionError(
                f"cannot read template {template_path}: {exc}"
            ) from exc
        self._loaded[template_path] = template
        return template

    def render(self, template_path: Path, bindings: dict[str, Any]) -> str:
        template_path = Path(template_path)
        template = self.load(template_path)
        try:
            return template.render(**bindings)
        except TemplateNotFound as exc:
            # {% include %} of a missing file
            raise TemplateResolutionError(f"template not found: {exc.name}") from exc
        except TemplateError as exc:
            raise RenderError(f"{template_path.name}: {exc}") from exc


def jinja_engine_for(template_path: Path, mode: str) -> TemplateEngine:
    """Default engine factory used by the renderer.

    The entry file is parsed here, so a missing or broken template fails
    before the renderer writes anything to disk.
    """
    log.debug("Resolving %s template %s", mode, template_path)
    engine = JinjaTemplateEngine(mode)
    engine.load(template_path)
    return engine


# ═══════════════════════════════════════════════════════════════════════════
#  WeasyPrint
# ═══════════════════════════════════════════════════════════════════════════


class WeasyPrintConverter:
    """Lays out an HTML file and returns the PDF bytes."""

    def convert(self, html_path: Path) -> bytes:
        html_path = Path(html_path)
        try:
            from weasyprint import HTML
        except (ImportError, OSError) as exc:
            # OSError: the native Pango/Cairo libraries are missing
            raise ConversionError(f"WeasyPrint is not available: {exc}") from exc
        try:
            pdf = HTML(
                filename=str(html_path),
                base_url=str(html_path.parent.resolve()),
            ).write_pdf()
        except Exception as exc:
            raise ConversionError(f"failed to convert {html_path.name} to PDF: {exc}") from exc
        if pdf is None:
            raise ConversionError(f"no PDF produced for {html_path.name}")
        return pdf
