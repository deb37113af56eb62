"""Report defaults loaded from ``config/reports.yaml``."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from src.shared.config_loader import load_yaml

log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/reports.yaml"
DEFAULT_NAME_PATTERN = "{{yyyy-MM-dd}}-Alert-Report-[[site]]"


@dataclass(slots=True)
class ReportSettings:
    template_dir: str = "templates"
    report_dir: str = "reports"
    name_pattern: str = DEFAULT_NAME_PATTERN
    template: str = "traditional-html"
    title: str = "Security Scan Report"
    description: str = ""
    display: bool = False

    @classmethod
    def load(cls, path: str | Path = DEFAULT_CONFIG_PATH) -> ReportSettings:
        """Read the ``reports:`` section; a missing file gives the defaults."""
        p = Path(path)
        if not p.exists():
            log.debug("No settings file at %s — using defaults", p)
            return cls()
        section = load_yaml(p).get("reports", {}) or {}
        if not isinstance(section, dict):
            raise ValueError(
                f"{p}: 'reports' must be a mapping, got {type(section).__name__}"
            )
        known = set(cls.__dataclass_fields__)
        unknown = set(section) - known
        if unknown:
            log.warning("Ignoring unknown report settings: %s", ", ".join(sorted(unknown)))
        return cls(**{k: v for k, v in section.items() if k in known})
