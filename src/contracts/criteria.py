"""Report criteria: what to include in a report and how to title it."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from src.contracts.enums import Confidence, Risk


@dataclass(slots=True)
class Context:
    """A named URI matcher.

    A URI is in the context when it fully matches at least one include
    regex and none of the exclude regexes.
    """

    name: str
    include_regexes: list[str] = field(default_factory=list)
    exclude_regexes: list[str] = field(default_factory=list)
    _include: list[re.Pattern[str]] = field(init=False, repr=False, compare=False)
    _exclude: list[re.Pattern[str]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._include = [re.compile(r) for r in self.include_regexes]
        self._exclude = [re.compile(r) for r in self.exclude_regexes]

    def is_included(self, uri: str) -> bool:
        if not any(p.fullmatch(uri) for p in self._include):
            return False
        return not any(p.fullmatch(uri) for p in self._exclude)


@dataclass(slots=True)
class ReportCriteria:
    """Filters and metadata for one report.

    Every filter collection is optional: empty means "no restriction on
    this axis", never "exclude everything".
    """

    title: str = ""
    description: str = ""
    contexts: list[Context] = field(default_factory=list)
    sites: list[str] = field(default_factory=list)
    confidences: set[Confidence] = field(default_factory=set)
    risks: set[Risk] = field(default_factory=set)

    def include_confidence(self, confidence: Confidence) -> bool:
        return not self.confidences or confidence in self.confidences

    def include_risk(self, risk: Risk) -> bool:
        return not self.risks or risk in self.risks
