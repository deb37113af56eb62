"""Ordinal classifications attached to every finding."""

from __future__ import annotations

from enum import IntEnum


class _Ordinal(IntEnum):
    """IntEnum with a display label and lenient parsing."""

    @property
    def label(self) -> str:
        return _LABELS[type(self)][self]

    @classmethod
    def parse(cls, value: object) -> _Ordinal:
        """Accept the integer value, the member name or the display label."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        text = str(value).strip()
        if text.lstrip("-").isdigit():
            return cls(int(text))
        key = text.upper().replace(" ", "_").replace("-", "_")
        if key in cls.__members__:
            return cls[key]
        for member, label in _LABELS[cls].items():
            if label.lower() == text.lower():
                return member
        raise ValueError(f"unknown {cls.__name__.lower()} '{value}'")


class Risk(_Ordinal):
    INFO = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3


class Confidence(_Ordinal):
    FALSE_POSITIVE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    USER_CONFIRMED = 4


_LABELS: dict[type, dict[_Ordinal, str]] = {
    Risk: {
        Risk.INFO: "Informational",
        Risk.LOW: "Low",
        Risk.MEDIUM: "Medium",
        Risk.HIGH: "High",
    },
    Confidence: {
        Confidence.FALSE_POSITIVE: "False Positive",
        Confidence.LOW: "Low",
        Confidence.MEDIUM: "Medium",
        Confidence.HIGH: "High",
        Confidence.USER_CONFIRMED: "Confirmed",
    },
}
