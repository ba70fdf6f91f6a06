"""
Deterministic risk scorer. Single pipeline for text, barcode, and API scans.
resolve tokens -> per-substance penalties -> clamp/round -> weighted overall -> trend.
Pure function of (tokens, profile, history, clock()).
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Sequence
import logging

from core.catalog.substance_schema import SubstanceRecord
from core.evaluation.penalties import (
    VULNERABILITY_MULTIPLIER,
    is_vulnerable,
    regulatory_penalty,
    round_half_up,
    severity_bucket,
    temporal_penalty,
    vulnerability_warning,
)
from core.models.analysis import AnalysisResult, Breakdown, ScanHistoryEntry, Trend
from core.models.user_profile import UserProfile
from core.resolution.substance_resolver import SubstanceResolver

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

PACKAGING_SUBSTANCE_ID = "pfas"

CLEAN_WEIGHT = 0.4
PACKAGING_WEIGHT = 0.2
REGULATORY_WEIGHT = 0.2
TEMPORAL_WEIGHT = 0.2

TREND_WINDOW = 3


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class _ScoreAccumulator:
    clean: float = 100.0
    packaging: float = 100.0
    regulatory: float = 100.0
    temporal: float = 100.0
    buckets: dict = field(default_factory=lambda: {"safe": 0, "caution": 0, "risk": 0})
    warnings: List[str] = field(default_factory=list)


def _clamp_round(value: float) -> int:
    return max(0, min(100, round_half_up(value)))


def _history_score(entry: Any) -> float:
    if isinstance(entry, ScanHistoryEntry):
        return entry.overall_score
    if isinstance(entry, dict):
        score = entry.get("overall_score")
        return entry.get("overallScore", 0) if score is None else score
    return getattr(entry, "overall_score", 0)


def compute_trend(overall_score: float, history: Sequence[Any]) -> Trend:
    """Compare against the mean of the last 3 scans; fewer than 3 scans is Stable."""
    if len(history) < TREND_WINDOW:
        return Trend.STABLE
    recent = list(history)[-TREND_WINDOW:]
    mean = sum(_history_score(e) for e in recent) / TREND_WINDOW
    return Trend.IMPROVING if overall_score > mean else Trend.DECLINING


def compute_breakdown(buckets: dict) -> Breakdown:
    total = sum(buckets.values()) or 1
    return Breakdown(
        safe=round_half_up(buckets["safe"] / total * 100),
        caution=round_half_up(buckets["caution"] / total * 100),
        risk=round_half_up(buckets["risk"] / total * 100),
    )


def weighted_overall(clean: int, packaging: int, regulatory: int, temporal: int) -> int:
    return round_half_up(
        clean * CLEAN_WEIGHT
        + packaging * PACKAGING_WEIGHT
        + regulatory * REGULATORY_WEIGHT
        + temporal * TEMPORAL_WEIGHT
    )


class RiskScorer:
    """
    Scores a scan's tokens for one user.
    The catalog is read-only and profile/history are never mutated, so one
    instance can serve concurrent requests.
    """

    def __init__(
        self,
        resolver: Optional[SubstanceResolver] = None,
        clock: Optional[Clock] = None,
    ):
        self._resolver = resolver or SubstanceResolver()
        self._clock = clock or utc_now

    @property
    def resolver(self) -> SubstanceResolver:
        return self._resolver

    def resolve_tokens(self, tokens: Sequence[str]) -> List[SubstanceRecord]:
        """Flatten every token into scoring units (a generic phrase yields several)."""
        substances: List[SubstanceRecord] = []
        for token in tokens:
            substances.extend(self._resolver.resolve_all(token))
        return substances

    def score(
        self,
        tokens: Any,
        profile: Optional[UserProfile] = None,
        history: Optional[Sequence[Any]] = None,
    ) -> AnalysisResult:
        """
        Score ingredient tokens against the catalog.
        - tokens: ordered ingredient tokens; anything that is not a list/tuple of
          strings gets the permissive perfect result.
        - profile: drives vulnerability amplification and warnings.
        - history: prior scans (oldest first); only the last 3 are read.
        Raises DataIntegrityError when a catalog ban date cannot be evaluated.
        """
        if not isinstance(tokens, (list, tuple)) or not all(isinstance(t, str) for t in tokens):
            logger.warning("SCORE malformed tokens type=%s; returning default result", type(tokens).__name__)
            return AnalysisResult.perfect()

        profile = profile or UserProfile()
        history = history or []
        now = self._clock()

        substances = self.resolve_tokens(tokens)
        n = len(substances)
        acc = _ScoreAccumulator()

        for substance in substances:
            adjustment = substance.severity_score
            if is_vulnerable(substance, profile):
                adjustment *= VULNERABILITY_MULTIPLIER
                acc.warnings.append(vulnerability_warning(substance))
            acc.clean -= adjustment / n
            if substance.id == PACKAGING_SUBSTANCE_ID:
                acc.packaging -= adjustment / n
            acc.regulatory -= (100 - regulatory_penalty(substance)) / n
            acc.temporal -= (100 - temporal_penalty(substance, now)) / n
            acc.buckets[severity_bucket(substance.severity_score)] += 1

        clean = _clamp_round(acc.clean)
        packaging = _clamp_round(acc.packaging)
        regulatory = _clamp_round(acc.regulatory)
        temporal = _clamp_round(acc.temporal)
        overall = weighted_overall(clean, packaging, regulatory, temporal)
        trend = compute_trend(overall, history)

        logger.info(
            "SCORE tokens=%d units=%d clean=%d packaging=%d regulatory=%d temporal=%d overall=%d trend=%s warnings=%d",
            len(tokens), n, clean, packaging, regulatory, temporal, overall, trend.value, len(acc.warnings),
        )
        return AnalysisResult(
            clean_score=clean,
            packaging_score=packaging,
            regulatory_score=regulatory,
            temporal_score=temporal,
            overall_score=overall,
            breakdown=compute_breakdown(acc.buckets),
            warnings=tuple(acc.warnings),
            trend=trend,
        )
