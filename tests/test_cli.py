"""Tests for the alert-report command line."""

from __future__ import annotations

from pathlib import Path

import pytest

from src.reports.cli import build_parser, main

ROOT = Path(__file__).resolve().parent.parent
FINDINGS = """\
- {uri: 'https://example.com/a', risk: high, confidence: high, name: SQL Injection, plugin_id: 40018}
- {uri: 'https://example.com/b', risk: medium, confidence: low, name: XSS, plugin_id: 40012}
- {uri: 'https://other.org/c', risk: low, confidence: medium, name: Cookie Flag, plugin_id: 10010}
"""


@pytest.fixture
def findings_file(tmp_path):
    path = tmp_path / "findings.yaml"
    path.write_text(FINDINGS, encoding="utf-8")
    return path


def _base_args(tmp_path, findings_file):
    return [
        "--findings", str(findings_file),
        "--config", str(tmp_path / "missing.yaml"),
        "--template-dir", str(ROOT / "templates"),
        "--out-dir", str(tmp_path / "out"),
    ]


class TestParser:
    def test_repeatable_filters(self):
        args = build_parser().parse_args(
            ["--risk", "high", "--risk", "2", "--confidence", "low", "--context", "app=https://x/.*"]
        )
        assert [int(r) for r in args.risk] == [3, 2]
        assert [int(c) for c in args.confidence] == [1]
        assert args.context[0].name == "app"

    def test_bad_risk(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--risk", "extreme"])

    def test_bad_context(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--context", "no-equals"])


class TestMain:
    def test_html_report(self, tmp_path, findings_file, capsys):
        code = main(
            _base_args(tmp_path, findings_file)
            + ["--pattern", "scan-[[site]]", "--site", "https://example.com", "--title", "Nightly"]
        )
        assert code == 0
        out = Path(capsys.readouterr().out.strip())
        assert out == tmp_path / "out" / "scan-example.com.html"
        text = out.read_text(encoding="utf-8")
        assert "Nightly" in text
        assert "SQL Injection" in text
        assert "Cookie Flag" not in text
        assert (tmp_path / "out" / "scan-example.com" / "report.css").exists()

    def test_markdown_report_with_risk_filter(self, tmp_path, findings_file, capsys):
        code = main(
            _base_args(tmp_path, findings_file)
            + ["--template", "Traditional Markdown Report", "--pattern", "scan", "--risk", "low"]
        )
        assert code == 0
        text = (tmp_path / "out" / "scan.md").read_text(encoding="utf-8")
        assert "Cookie Flag" in text
        assert "SQL Injection" not in text
        assert "| Low | 1 |" in text

    def test_unknown_template(self, tmp_path, findings_file):
        assert main(_base_args(tmp_path, findings_file) + ["--template", "nope"]) == 2

    def test_bad_pattern_fails(self, tmp_path, findings_file):
        assert main(_base_args(tmp_path, findings_file) + ["--pattern", "{{yyyy-QQ}}"]) == 1

    def test_missing_findings_file(self, tmp_path):
        assert main(_base_args(tmp_path, tmp_path / "absent.yaml")) == 1

    def test_list_templates(self, tmp_path, capsys):
        code = main(
            ["--list-templates", "--config", str(tmp_path / "none.yaml"), "--template-dir", str(ROOT / "templates")]
        )
        assert code == 0
        out = capsys.readouterr().out
        assert "traditional-html" in out
        assert "traditional-pdf" in out

    def test_findings_required(self, tmp_path):
        with pytest.raises(SystemExit):
            main(["--config", str(tmp_path / "none.yaml"), "--template-dir", str(ROOT / "templates")])
