"""Formatting utilities exposed to templates as ``helper``."""

from __future__ import annotations

from datetime import datetime
from urllib.parse import urlsplit

from src.contracts.alert_tree import AlertNode
from src.contracts.enums import Confidence, Risk
from src.reports.pattern import format_date

_RISK_CSS = {
    Risk.INFO: "risk-info",
    Risk.LOW: "risk-low",
    Risk.MEDIUM: "risk-medium",
    Risk.HIGH: "risk-high",
}


class ReportHelper:
    """Stateless, read-only helpers for template authors."""

    def risk_label(self, risk: int) -> str:
        return Risk.parse(risk).label

    def confidence_label(self, confidence: int) -> str:
        return Confidence.parse(confidence).label

    def risk_css_class(self, risk: int) -> str:
        return _RISK_CSS[Risk.parse(risk)]

    def host_of(self, uri: str) -> str:
        """Host part of *uri*, or the URI itself when it has none."""
        return urlsplit(uri).hostname or uri

    def format_timestamp(self, when: datetime | None = None, spec: str = "yyyy-MM-dd HH:mm:ss") -> str:
        return format_date(spec, when or datetime.now())

    def finding_count(self, node: AlertNode) -> int:
        """Number of instances below a type node (or of a whole tree)."""
        if node.finding is not None:
            return 1
        return sum(self.finding_count(child) for child in node.children)
