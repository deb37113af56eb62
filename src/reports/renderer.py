"""Report rendering: bind data into a template, write, convert, display.

Steps, in order:
  1. resolve the template engine (entry file + mode)
  2. build the template bindings
  3. PDF templates render to an intermediate ``.html`` path first
  4. copy the template's resources beside the output
  5. render into the working file
  6. convert to PDF and drop the intermediate HTML (best effort)
  7. optionally open the result (best effort)
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
import tempfile
import webbrowser
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from src.contracts.alert_tree import AlertNode
from src.contracts.criteria import ReportCriteria
from src.contracts.template import Template
from src.reports.engine import (
    PdfConverter,
    TemplateEngine,
    WeasyPrintConverter,
    jinja_engine_for,
)
from src.reports.errors import ReportIOError
from src.reports.helper import ReportHelper
from src.reports.tree_filter import count_alerts_by_risk

log = logging.getLogger(__name__)

EngineFactory = Callable[[Path, str], TemplateEngine]
Opener = Callable[[Path, Template], None]

# Read once at import: os.umask() can only be queried by setting it.
_UMASK = os.umask(0)
os.umask(_UMASK)
REPORT_FILE_MODE = 0o666 & ~_UMASK


@dataclass(frozen=True, slots=True)
class GeneratedReport:
    path: Path
    resources: str | None = None  # name of the copied resources directory


# ═══════════════════════════════════════════════════════════════════════════
#  File helpers
# ═══════════════════════════════════════════════════════════════════════════


def _atomic_write(path: Path, content: str | bytes) -> None:
    """Write *content* to a temp file beside *path*, then move it in place."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(
        dir=str(path.parent),
        prefix=f".{path.name}.",
        suffix=".tmp",
    )
    try:
        if isinstance(content, bytes):
            with os.fdopen(fd, "wb") as fh:
                fh.write(content)
                fh.flush()
                os.fsync(fh.fileno())
        else:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(content)
                fh.flush()
                os.fsync(fh.fileno())
        os.chmod(tmp, REPORT_FILE_MODE)
        os.replace(tmp, path)
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


def working_path(output_path: Path, template: Template) -> Path:
    """Path the template is rendered to.

    Converted formats always render to ``.html`` first: a trailing
    ``.pdf`` is swapped, any other name gets ``.html`` appended.
    """
    if not template.requires_conversion:
        return output_path
    name = output_path.name
    suffix = f".{template.extension}"
    if name.lower().endswith(suffix.lower()):
        name = name[: -len(suffix)]
    return output_path.with_name(name + ".html")


def final_path(work_path: Path, template: Template) -> Path:
    if not template.requires_conversion:
        return work_path
    return work_path.with_name(work_path.name[: -len(".html")] + f".{template.extension}")


def resources_base(work_path: Path) -> Path:
    """Resource directory candidate: the file stem, or ``<name>_d``."""
    if work_path.suffix and work_path.stem:
        return work_path.with_suffix("")
    return work_path.with_name(work_path.name + "_d")


def claim_resources_dir(base: Path) -> Path:
    """Create and return the first free directory of ``base``, ``base2``, ...

    ``mkdir`` either creates the directory or fails, so two concurrent
    reports can never end up with the same directory.
    """
    base.parent.mkdir(parents=True, exist_ok=True)
    candidate = base
    i = 1
    while True:
        try:
            candidate.mkdir()
            return candidate
        except FileExistsError:
            i += 1
            candidate = base.with_name(f"{base.name}{i}")


def copy_resources(source: Path, work_path: Path) -> str:
    """Copy a template's resources beside the report; return the dir name."""
    base = resources_base(work_path)
    try:
        target = claim_resources_dir(base)
    except OSError as exc:
        raise ReportIOError(f"failed to create resources directory {base}: {exc}") from exc
    log.debug("Copying resources from %s to %s", source.resolve(), target.resolve())
    try:
        shutil.copytree(source, target, dirs_exist_ok=True)
    except (OSError, shutil.Error) as exc:
        shutil.rmtree(target, ignore_errors=True)
        raise ReportIOError(f"failed to copy resources to {target}: {exc}") from exc
    return target.name


# ═══════════════════════════════════════════════════════════════════════════
#  Display
# ═══════════════════════════════════════════════════════════════════════════


def open_report(path: Path, template: Template) -> None:
    """Open *path* for the user: browser for HTML, default app otherwise."""
    if template.format == "HTML":
        webbrowser.open(path.resolve().as_uri())
    elif sys.platform.startswith("win"):
        os.startfile(str(path))  # type: ignore[attr-defined]
    elif sys.platform == "darwin":
        subprocess.run(["open", str(path)], check=True)
    else:
        subprocess.run(["xdg-open", str(path)], check=True)


# ═══════════════════════════════════════════════════════════════════════════
#  Renderer
# ═══════════════════════════════════════════════════════════════════════════


class ReportRenderer:
    """Turns a filtered alert tree into a report file."""

    def __init__(
        self,
        engine_factory: EngineFactory = jinja_engine_for,
        converter: PdfConverter | None = None,
        opener: Opener = open_report,
    ) -> None:
        self.engine_factory = engine_factory
        self.converter = converter or WeasyPrintConverter()
        self.opener = opener

    def bindings(self, criteria: ReportCriteria, tree: AlertNode) -> dict[str, Any]:
        return {
            "alert_tree": tree,
            "report_title": criteria.title,
            "description": criteria.description,
            "helper": ReportHelper(),
            "alert_counts": count_alerts_by_risk(tree),
            "report_data": criteria,
        }

    def render(
        self,
        criteria: ReportCriteria,
        tree: AlertNode,
        template: Template,
        output_path: str | Path,
        display: bool = False,
    ) -> GeneratedReport:
        """Generate the report file for *tree* using *template*.

        Raises:
            TemplateResolutionError: Entry file missing or unreadable.
            RenderError: The template engine failed.
            ConversionError: HTML-to-PDF conversion failed.
            ReportIOError: Writing the report or copying resources failed.
        """
        engine = self.engine_factory(template.report_template_file, template.mode)
        context = self.bindings(criteria, tree)

        work_path = working_path(Path(output_path), template)

        resources: str | None = None
        if template.resources_dir.is_dir():
            resources = copy_resources(template.resources_dir, work_path)
        context["resources"] = resources

        try:
            content = engine.render(template.report_template_file, context)
            try:
                _atomic_write(work_path, content)
            except OSError as exc:
                raise ReportIOError(f"failed to write {work_path}: {exc}") from exc
        except BaseException:
            if resources is not None:
                shutil.rmtree(work_path.parent / resources, ignore_errors=True)
            raise

        path = work_path
        if template.requires_conversion:
            path = final_path(work_path, template)
            pdf = self.converter.convert(work_path)
            try:
                _atomic_write(path, pdf)
            except OSError as exc:
                raise ReportIOError(f"failed to write {path}: {exc}") from exc
            try:
                work_path.unlink()
            except OSError as exc:
                log.warning("Failed to delete interim report %s: %s", work_path, exc)

        log.info("Generated report → %s", path.resolve())

        if display:
            try:
                self.opener(path, template)
            except Exception as exc:
                log.warning("Could not open report %s: %s", path, exc)

        return GeneratedReport(path=path, resources=resources)
