"""Finding (alert payload) model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from src.contracts.enums import Confidence, Risk


@dataclass(frozen=True, slots=True)
class Finding:
    """One security observation raised by a scan rule against a URI."""

    uri: str
    risk: Risk
    confidence: Confidence
    name: str = ""
    plugin_id: int = -1  # scan rule id, -1 when unknown
    method: str = ""
    param: str = ""
    evidence: str = ""
    description: str = ""
    solution: str = ""
    reference: str = ""
    other_info: str = ""
    cwe_id: int = 0
    wasc_id: int = 0

    @classmethod
    def from_dict(cls, row: dict[str, Any]) -> Finding:
        """Build a Finding from a mapping (one entry of a findings file).

        ``uri``, ``risk`` and ``confidence`` are required; risk and
        confidence accept numbers, member names or display labels.
        """
        try:
            uri = row["uri"]
            risk = Risk.parse(row["risk"])
            confidence = Confidence.parse(row["confidence"])
        except KeyError as exc:
            raise ValueError(f"finding is missing required field {exc}") from None
        return cls(
            uri=str(uri),
            risk=risk,
            confidence=confidence,
            name=str(row.get("name", "")),
            plugin_id=int(row.get("plugin_id", -1)),
            method=str(row.get("method", "")),
            param=str(row.get("param", "")),
            evidence=str(row.get("evidence", "")),
            description=str(row.get("description", "")),
            solution=str(row.get("solution", "")),
            reference=str(row.get("reference", "")),
            other_info=str(row.get("other_info", "")),
            cwe_id=int(row.get("cwe_id", 0)),
            wasc_id=int(row.get("wasc_id", 0)),
        )
