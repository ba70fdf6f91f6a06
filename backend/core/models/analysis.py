"""
Structured analysis output and scan history entries.
Single format for the engine, the HTTP API, and the caller's history.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Union


class Trend(str, Enum):
    IMPROVING = "Improving"
    DECLINING = "Declining"
    STABLE = "Stable"


@dataclass(frozen=True)
class Breakdown:
    safe: int = 0
    caution: int = 0
    risk: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"safe": self.safe, "caution": self.caution, "risk": self.risk}


@dataclass(frozen=True)
class AnalysisResult:
    clean_score: int
    packaging_score: int
    regulatory_score: int
    temporal_score: int
    overall_score: int  # weighted sum of the rounded components; not clamped
    breakdown: Breakdown = field(default_factory=Breakdown)
    warnings: tuple[str, ...] = ()
    trend: Trend = Trend.STABLE

    @classmethod
    def perfect(cls) -> "AnalysisResult":
        """Permissive default for input that is not an ingredient sequence."""
        return cls(
            clean_score=100,
            packaging_score=100,
            regulatory_score=100,
            temporal_score=100,
            overall_score=100,
            breakdown=Breakdown(safe=100, caution=0, risk=0),
            warnings=(),
            trend=Trend.STABLE,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "clean_score": self.clean_score,
            "packaging_score": self.packaging_score,
            "regulatory_score": self.regulatory_score,
            "temporal_score": self.temporal_score,
            "overall_score": self.overall_score,
            "breakdown": self.breakdown.to_dict(),
            "warnings": list(self.warnings),
            "trend": self.trend.value,
        }


@dataclass(frozen=True)
class ScanHistoryEntry:
    date: datetime
    overall_score: float

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date.isoformat(), "overall_score": self.overall_score}

    @classmethod
    def from_dict(cls, d: dict) -> "ScanHistoryEntry":
        raw_date: Union[str, datetime] = d["date"]
        date = raw_date if isinstance(raw_date, datetime) else datetime.fromisoformat(
            str(raw_date).replace("Z", "+00:00")
        )
        score = d.get("overall_score")
        if score is None:
            score = d.get("overallScore", 0)
        return cls(date=date, overall_score=score)
