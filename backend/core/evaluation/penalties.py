"""
Per-substance penalty rules: profile vulnerability, regulatory status, upcoming bans.
Each function looks at one substance only; aggregation lives in risk_scorer.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List
import math

from core.catalog.substance_schema import RegulatoryStatus, SubstanceRecord
from core.errors import DataIntegrityError
from core.models.user_profile import UserProfile

VULNERABILITY_MULTIPLIER = 1.2

BANNED_PENALTY = 30
RESTRICTED_PENALTY = 15

BAN_WITHIN_ONE_YEAR_PENALTY = 20
BAN_WITHIN_TWO_YEARS_PENALTY = 10
_ONE_YEAR_DAYS = 365
_TWO_YEARS_DAYS = 730


@dataclass(frozen=True)
class VulnerabilityRule:
    """Fires when a population descriptor contains `marker` and the profile satisfies `applies`."""
    marker: str
    applies: Callable[[UserProfile], bool]


# Fixed table; descriptors that match no marker are ignored.
VULNERABILITY_RULES: List[VulnerabilityRule] = [
    VulnerabilityRule("Children", lambda p: p.age < 18),
    VulnerabilityRule("Pregnant", lambda p: p.pregnancy_status == "pregnant"),
    VulnerabilityRule("Diabetics", lambda p: "diabetic" in p.dietary_preferences),
    VulnerabilityRule("Hypertension", lambda p: "low_sodium" in p.dietary_preferences),
]


def round_half_up(value: float) -> int:
    """Round .5 upward (toward +inf), not to even."""
    return int(math.floor(value + 0.5))


def is_vulnerable(substance: SubstanceRecord, profile: UserProfile) -> bool:
    for population in substance.vulnerable_populations:
        for rule in VULNERABILITY_RULES:
            if rule.marker in population and rule.applies(profile):
                return True
    return False


def vulnerability_warning(substance: SubstanceRecord) -> str:
    return f"Warning: {substance.name} may be harmful for {', '.join(substance.vulnerable_populations)}"


def regulatory_penalty(substance: SubstanceRecord) -> int:
    """100 minus 30 if banned anywhere, else minus 15 if restricted anywhere."""
    score = 100
    if substance.has_status(RegulatoryStatus.BANNED):
        score -= BANNED_PENALTY
    elif substance.has_status(RegulatoryStatus.RESTRICTED):
        score -= RESTRICTED_PENALTY
    return max(0, score)


def _parse_ban_date(substance: SubstanceRecord) -> datetime:
    raw = substance.upcoming_ban.date
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except (TypeError, ValueError, AttributeError) as e:
        raise DataIntegrityError(f"Malformed upcoming ban date {raw!r}", substance_id=substance.id) from e
    if parsed.tzinfo is None:
        # Date-only values are midnight UTC
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def days_until_ban(substance: SubstanceRecord, now: datetime) -> float:
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return (_parse_ban_date(substance) - now).total_seconds() / 86400


def temporal_penalty(substance: SubstanceRecord, now: datetime) -> int:
    """100 minus 20 if a ban lands within a year of `now`, else minus 10 within two years."""
    score = 100
    if substance.upcoming_ban is not None:
        days = days_until_ban(substance, now)
        if days < _ONE_YEAR_DAYS:
            score -= BAN_WITHIN_ONE_YEAR_PENALTY
        elif days < _TWO_YEARS_DAYS:
            score -= BAN_WITHIN_TWO_YEARS_PENALTY
    return max(0, score)


def severity_bucket(severity: float) -> str:
    if severity < 60:
        return "safe"
    if severity < 80:
        return "caution"
    return "risk"
