"""CLI entry-point for report generation.

Usage examples
--------------
# HTML report of all findings:
alert-report --findings scan.yaml

# PDF of high/medium findings for one site:
alert-report --findings scan.json --template traditional-pdf \
    --site https://example.com --risk high --risk medium

# List available templates:
alert-report --list-templates
"""

from __future__ import annotations

import argparse
import logging
import sys

from src.contracts.alert_tree import InMemoryAlertTree, build_alert_tree
from src.contracts.criteria import Context, ReportCriteria
from src.contracts.enums import Confidence, Risk
from src.reports.errors import ReportError
from src.reports.pipeline import generate_report, load_findings
from src.reports.registry import TemplateRegistry
from src.reports.settings import DEFAULT_CONFIG_PATH, ReportSettings
from src.shared.logger import setup_logging

log = logging.getLogger(__name__)


def _context(value: str) -> Context:
    name, sep, regex = value.partition("=")
    if not sep or not name or not regex:
        raise argparse.ArgumentTypeError(f"expected NAME=REGEX, got '{value}'")
    return Context(name=name, include_regexes=[regex])


def _ordinal(enum_cls):
    def parse(value: str):
        try:
            return enum_cls.parse(value)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from None

    parse.__name__ = enum_cls.__name__.lower()
    return parse


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="alert-report",
        description="Render security findings into an HTML or PDF report",
    )
    p.add_argument("--findings", help="Findings file (YAML or JSON).")
    p.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help=f"Settings file. Default: {DEFAULT_CONFIG_PATH}",
    )
    p.add_argument("--template", help="Template config name or display name.")
    p.add_argument("--template-dir", help="Directory with template subdirectories.")
    p.add_argument("--out-dir", help="Output directory for the report.")
    p.add_argument(
        "--pattern",
        help="File name pattern; supports [[site]] and {{yyyy-MM-dd}} placeholders.",
    )
    p.add_argument("--title", help="Report title.")
    p.add_argument("--description", help="Report description.")
    p.add_argument(
        "--site",
        action="append",
        default=[],
        help="Only include findings whose URI starts with this prefix (repeatable).",
    )
    p.add_argument(
        "--context",
        action="append",
        type=_context,
        default=[],
        metavar="NAME=REGEX",
        help="Only include findings whose URI matches the context regex (repeatable).",
    )
    p.add_argument(
        "--risk",
        action="append",
        type=_ordinal(Risk),
        default=[],
        help="Risk level to include: info, low, medium, high (repeatable).",
    )
    p.add_argument(
        "--confidence",
        action="append",
        type=_ordinal(Confidence),
        default=[],
        help="Confidence level to include (repeatable).",
    )
    p.add_argument(
        "--display",
        action="store_true",
        default=None,
        help="Open the report once it is generated.",
    )
    p.add_argument(
        "--list-templates",
        action="store_true",
        help="Print the available templates and exit.",
    )
    p.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level. Default: INFO",
    )
    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings = ReportSettings.load(args.config)
    registry = TemplateRegistry(args.template_dir or settings.template_dir).load()

    if args.list_templates:
        for template in registry.templates():
            print(f"{template.config_name:<24} {template.format:<5} {template.display_name}")
        return 0

    if not args.findings:
        parser.error("--findings is required")

    template_name = args.template or settings.template
    template = registry.find(template_name)
    if template is None:
        log.error(
            "Unknown template '%s'. Available: %s",
            template_name,
            ", ".join(t.config_name for t in registry.templates()) or "none",
        )
        return 2

    criteria = ReportCriteria(
        title=args.title if args.title is not None else settings.title,
        description=args.description if args.description is not None else settings.description,
        contexts=args.context,
        sites=args.site,
        confidences=set(args.confidence),
        risks=set(args.risk),
    )
    display = settings.display if args.display is None else args.display

    try:
        findings = load_findings(args.findings)
        report = generate_report(
            InMemoryAlertTree(build_alert_tree(findings)),
            criteria,
            template,
            args.pattern or settings.name_pattern,
            out_dir=args.out_dir or settings.report_dir,
            display=display,
        )
    except (ReportError, OSError, ValueError) as exc:
        log.error("Report generation failed: %s", exc)
        return 1

    print(report.path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
