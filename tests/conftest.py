"""Shared fixtures for the alert report tests."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from src.contracts.alert_tree import AlertNode
from src.contracts.enums import Confidence, Risk
from src.contracts.finding import Finding
from src.contracts.template import Template

# ── Helper: create Finding with sensible defaults ───────────────────────


def make_finding(
    *,
    uri: str = "https://example.com/login",
    risk: Risk = Risk.MEDIUM,
    confidence: Confidence = Confidence.MEDIUM,
    name: str = "Cross Site Scripting",
    plugin_id: int = 40012,
    param: str = "q",
) -> Finding:
    return Finding(
        uri=uri,
        risk=risk,
        confidence=confidence,
        name=name,
        plugin_id=plugin_id,
        param=param,
    )


def make_tree(groups: list[tuple[str, Risk, list[Finding]]], label: str = "Alerts") -> AlertNode:
    """Build root -> type -> instance nodes from (label, risk, findings) groups."""
    root = AlertNode(label)
    for type_label, risk, findings in groups:
        type_node = AlertNode(type_label, risk)
        for finding in findings:
            type_node.add(AlertNode(finding.uri, finding.risk, finding))
        root.add(type_node)
    return root


def write_template(
    base: Path,
    name: str,
    body: str,
    *,
    fmt: str = "HTML",
    mode: str = "html",
    extension: str | None = None,
    entry: str = "report.html",
    resources: dict[str, str] | None = None,
) -> Template:
    """Write a template directory under *base* and load its descriptor."""
    directory = base / name
    directory.mkdir(parents=True)
    extension = extension or fmt.lower()
    (directory / "template.yaml").write_text(
        f"name: {name} report\nformat: {fmt}\nmode: {mode}\n"
        f"extension: {extension}\ntemplate: {entry}\n",
        encoding="utf-8",
    )
    (directory / entry).write_text(body, encoding="utf-8")
    if resources is not None:
        res = directory / "resources"
        res.mkdir()
        for rel, content in resources.items():
            target = res / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
    return Template.from_yaml(directory / "template.yaml")


class FakeConverter:
    """Stands in for the PDF library: records inputs, returns fixed bytes."""

    def __init__(self, result: bytes = b"%PDF-1.7 fake") -> None:
        self.result = result
        self.calls: list[tuple[Path, str]] = []

    def convert(self, html_path: Path) -> bytes:
        self.calls.append((html_path, Path(html_path).read_text(encoding="utf-8")))
        return self.result


SUMMARY_BODY = (
    "<h1>{{ report_title }}</h1>"
    "{% for alert in alert_tree.children %}"
    "<h2>{{ alert.label }}</h2>"
    "{% for i in alert.children %}<li>{{ i.finding.uri }}</li>{% endfor %}"
    "{% endfor %}"
    "<p>res={{ resources }}</p>"
)


# ── Fixtures ─────────────────────────────────────────────────────────────


@pytest.fixture
def when() -> datetime:
    return datetime(2024, 1, 15, 9, 5, 7, 123000)


@pytest.fixture
def sample_tree() -> AlertNode:
    """Three alert types over two sites; 'Info Leak' has a single instance."""
    return make_tree(
        [
            (
                "SQL Injection",
                Risk.HIGH,
                [
                    make_finding(uri="https://example.com/a", risk=Risk.HIGH, confidence=Confidence.HIGH),
                    make_finding(uri="https://other.org/b", risk=Risk.HIGH, confidence=Confidence.LOW),
                ],
            ),
            (
                "Cross Site Scripting",
                Risk.MEDIUM,
                [
                    make_finding(uri="https://example.com/c", risk=Risk.MEDIUM),
                    make_finding(uri="https://example.com/d", risk=Risk.MEDIUM),
                ],
            ),
            (
                "Info Leak",
                Risk.INFO,
                [make_finding(uri="https://other.org/e", risk=Risk.INFO, confidence=Confidence.LOW)],
            ),
        ]
    )


@pytest.fixture
def html_template(tmp_path: Path) -> Template:
    return write_template(
        tmp_path / "templates",
        "html",
        SUMMARY_BODY,
        resources={"report.css": "body {}", "img/logo.svg": "<svg/>"},
    )


@pytest.fixture
def pdf_template(tmp_path: Path) -> Template:
    return write_template(tmp_path / "templates", "pdf", SUMMARY_BODY, fmt="PDF")
