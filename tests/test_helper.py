"""Tests for the template helper."""

from __future__ import annotations

from datetime import datetime

from src.contracts.enums import Risk
from src.reports.helper import ReportHelper


class TestReportHelper:
    def test_labels(self):
        h = ReportHelper()
        assert h.risk_label(3) == "High"
        assert h.risk_label(Risk.INFO) == "Informational"
        assert h.confidence_label(0) == "False Positive"
        assert h.risk_css_class(2) == "risk-medium"

    def test_host_of(self):
        h = ReportHelper()
        assert h.host_of("https://example.com:8443/a?b=1") == "example.com"
        assert h.host_of("not a url") == "not a url"

    def test_format_timestamp(self):
        assert ReportHelper().format_timestamp(datetime(2024, 1, 15, 10, 0), "dd/MM/yyyy HH:mm") == "15/01/2024 10:00"

    def test_finding_count(self, sample_tree):
        h = ReportHelper()
        assert h.finding_count(sample_tree) == 5
        assert h.finding_count(sample_tree.children[0]) == 2
