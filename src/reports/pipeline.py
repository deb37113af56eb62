"""Pipeline — the caller-facing operation: pattern -> filter -> render."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from src.contracts.alert_tree import AlertTreeProvider
from src.contracts.criteria import ReportCriteria
from src.contracts.finding import Finding
from src.contracts.template import Template
from src.reports.pattern import expand_pattern
from src.reports.renderer import GeneratedReport, ReportRenderer
from src.reports.tree_filter import get_filtered_alert_tree
from src.shared.config_loader import load_yaml_document

log = logging.getLogger(__name__)


def load_findings(path: str | Path) -> list[Finding]:
    """Load findings from a YAML or JSON file.

    The document is either a list of findings or a mapping with a
    ``findings`` list.
    """
    doc = load_yaml_document(path)
    if isinstance(doc, dict):
        doc = doc.get("findings", [])
    if not isinstance(doc, list):
        raise ValueError(f"{path}: expected a list of findings")
    findings = [Finding.from_dict(row) for row in doc]
    log.info("Loaded %d findings from %s", len(findings), path)
    return findings


def resolve_output_path(
    out_dir: str | Path,
    pattern: str,
    site: str | None,
    template: Template,
    when: datetime | None = None,
) -> Path:
    """Expand *pattern* and make sure the name ends with the template extension."""
    name = expand_pattern(pattern, site, when)
    suffix = f".{template.extension}"
    if not name.lower().endswith(suffix.lower()):
        name += suffix
    return Path(out_dir) / name


def generate_report(
    provider: AlertTreeProvider,
    criteria: ReportCriteria,
    template: Template,
    pattern: str,
    out_dir: str | Path = ".",
    display: bool = False,
    when: datetime | None = None,
    renderer: ReportRenderer | None = None,
) -> GeneratedReport:
    """Generate one report.

    The file name is resolved first so that a bad date spec fails before
    any work is done.  The site placeholder uses the first configured
    site, if any.
    """
    site = criteria.sites[0] if criteria.sites else ""
    output_path = resolve_output_path(out_dir, pattern, site, template, when)
    tree = get_filtered_alert_tree(provider, criteria)
    renderer = renderer or ReportRenderer()
    return renderer.render(criteria, tree, template, output_path, display)
