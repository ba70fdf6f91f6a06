"""
One scan as handed back to the caller: product, tokens, analysis, batch code.
"""
from dataclasses import dataclass, field
from typing import Any

from core.models.analysis import AnalysisResult

BADGE_THRESHOLDS = [(80, "Excellent"), (60, "Good"), (40, "Fair")]


def score_badge(overall_score: float) -> str:
    for threshold, label in BADGE_THRESHOLDS:
        if overall_score >= threshold:
            return label
    return "Poor"


@dataclass(frozen=True)
class ScanResult:
    product: str
    ingredients: tuple[str, ...]
    analysis: AnalysisResult
    batch_code: str = "Unknown"
    alternatives: tuple = field(default_factory=tuple)  # AlternativeProduct

    @property
    def badge(self) -> str:
        return score_badge(self.analysis.overall_score)

    def to_dict(self) -> dict[str, Any]:
        return {
            "product": self.product,
            "ingredients": list(self.ingredients),
            "analysis": self.analysis.to_dict(),
            "batch_code": self.batch_code,
            "badge": self.badge,
            "alternatives": [a.to_dict() for a in self.alternatives],
        }
