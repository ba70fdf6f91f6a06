from .substance_schema import (
    SubstanceRecord,
    UpcomingBan,
    RegulatoryStatus,
    UNKNOWN_SUBSTANCE_ID,
    make_unknown_substance,
    format_adi,
)
from .substance_catalog import SubstanceCatalog

__all__ = [
    "SubstanceRecord",
    "UpcomingBan",
    "RegulatoryStatus",
    "UNKNOWN_SUBSTANCE_ID",
    "make_unknown_substance",
    "format_adi",
    "SubstanceCatalog",
]
