"""
Contract for catalog substance records.
Matching uses detection_names only; name/aliases and the effect fields are display data.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

UNKNOWN_SUBSTANCE_ID = "unknown"
UNKNOWN_SEVERITY = 50
# Jurisdictions every record is expected to report on
DEFAULT_JURISDICTIONS = ("india", "usa", "eu")


class RegulatoryStatus(str, Enum):
    """Statuses the scorer reacts to. Catalog values are kept as raw strings; anything else is informational."""
    PERMITTED = "Permitted"
    RESTRICTED = "Restricted"
    BANNED = "Banned"
    GRAS = "GRAS"
    PHASED_OUT = "Phased out"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class UpcomingBan:
    region: str
    date: str  # ISO date; parsed at scoring time
    description: str = ""

    def to_dict(self) -> dict:
        return {"region": self.region, "date": self.date, "description": self.description}

    @classmethod
    def from_dict(cls, d: dict) -> "UpcomingBan":
        return cls(
            region=d.get("region", "") or "",
            date=str(d.get("date", "") or ""),
            description=d.get("description", "") or "",
        )


@dataclass(frozen=True)
class SubstanceRecord:
    id: str
    name: str
    severity_score: float
    detection_names: list[str] = field(default_factory=list)
    aliases: list[str] = field(default_factory=list)
    regulatory_status: dict[str, str] = field(default_factory=dict)
    vulnerable_populations: list[str] = field(default_factory=list)
    upcoming_ban: Optional[UpcomingBan] = None
    citations: list[str] = field(default_factory=list)
    # Informational only
    e_number: Optional[str] = None
    adi: Optional[str] = None
    immediate_effects: dict[str, list[str]] = field(default_factory=dict)
    long_term_effects: dict[str, list[str]] = field(default_factory=dict)
    mechanism_of_harm: str = ""
    organs_affected: list[str] = field(default_factory=list)
    cellular_damage: str = ""
    dangerous_combinations: list[str] = field(default_factory=list)
    commonly_found_in: list[str] = field(default_factory=list)

    @property
    def is_unknown(self) -> bool:
        return self.id == UNKNOWN_SUBSTANCE_ID

    def has_status(self, status: RegulatoryStatus) -> bool:
        """True if any jurisdiction reports exactly this status."""
        return any(v == status for v in self.regulatory_status.values())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "aliases": list(self.aliases),
            "e_number": self.e_number,
            "adi": self.adi,
            "regulatory_status": dict(self.regulatory_status),
            "immediate_effects": {k: list(v) for k, v in self.immediate_effects.items()},
            "long_term_effects": {k: list(v) for k, v in self.long_term_effects.items()},
            "mechanism_of_harm": self.mechanism_of_harm,
            "organs_affected": list(self.organs_affected),
            "cellular_damage": self.cellular_damage,
            "vulnerable_populations": list(self.vulnerable_populations),
            "dangerous_combinations": list(self.dangerous_combinations),
            "commonly_found_in": list(self.commonly_found_in),
            "detection_names": list(self.detection_names),
            "severity_score": self.severity_score,
            "citations": list(self.citations),
            "upcoming_ban": self.upcoming_ban.to_dict() if self.upcoming_ban else None,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "SubstanceRecord":
        ban = d.get("upcoming_ban")
        return cls(
            id=d["id"],
            name=d.get("name", d["id"]),
            severity_score=d.get("severity_score", UNKNOWN_SEVERITY),
            detection_names=[n.lower() for n in (d.get("detection_names", []) or [])],
            aliases=d.get("aliases", []) or [],
            regulatory_status=dict(d.get("regulatory_status", {}) or {}),
            vulnerable_populations=d.get("vulnerable_populations", []) or [],
            upcoming_ban=UpcomingBan.from_dict(ban) if ban else None,
            citations=d.get("citations", []) or [],
            e_number=d.get("e_number"),
            adi=d.get("adi"),
            immediate_effects=d.get("immediate_effects", {}) or {},
            long_term_effects=d.get("long_term_effects", {}) or {},
            mechanism_of_harm=d.get("mechanism_of_harm", "") or "",
            organs_affected=d.get("organs_affected", []) or [],
            cellular_damage=d.get("cellular_damage", "") or "",
            dangerous_combinations=d.get("dangerous_combinations", []) or [],
            commonly_found_in=d.get("commonly_found_in", []) or [],
        )


def make_unknown_substance(name: str) -> SubstanceRecord:
    """Placeholder for a token the catalog cannot identify. Moderate severity, no regulatory signal."""
    return SubstanceRecord(
        id=UNKNOWN_SUBSTANCE_ID,
        name=name,
        severity_score=UNKNOWN_SEVERITY,
        regulatory_status={j: RegulatoryStatus.UNKNOWN.value for j in DEFAULT_JURISDICTIONS},
        citations=[],
    )


def format_adi(adi: Optional[str]) -> str:
    """Acceptable Daily Intake for display: per-kg figures read as '<x> body weight'."""
    if not adi:
        return "Not specified"
    if "Not" in adi or "Less than" in adi:
        return adi
    return adi + " body weight"
