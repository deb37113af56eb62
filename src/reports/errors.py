"""Typed failures of report generation."""

from __future__ import annotations


class ReportError(Exception):
    """Base class for every report-generation failure."""


class FormatSpecError(ReportError):
    """A ``{{...}}`` date token in a file-name pattern is malformed."""

    def __init__(self, segment: str, reason: str) -> None:
        super().__init__(f"invalid date format '{segment}': {reason}")
        self.segment = segment


class TemplateResolutionError(ReportError):
    """The template entry file is missing or unreadable."""


class RenderError(ReportError):
    """The template engine failed (syntax error, unresolved variable ...)."""


class ConversionError(ReportError):
    """HTML-to-PDF conversion failed."""


class ReportIOError(ReportError):
    """Writing the report or copying its resources failed."""


class SourceUnavailableError(ReportError):
    """The alert tree could not be obtained from its provider."""
