"""
Maps one ingredient token to catalog substances.
Tiers, first match wins: exact id -> detection name (bidirectional substring,
catalog order) -> generic category phrase -> unknown placeholder.
Only the generic tier returns more than one record.
"""
from enum import Enum
from typing import List, Optional, Tuple, Union
import logging

from core.catalog.substance_catalog import SubstanceCatalog
from core.catalog.substance_schema import SubstanceRecord, make_unknown_substance

logger = logging.getLogger(__name__)

Resolution = Union[SubstanceRecord, List[SubstanceRecord]]


class MatchTier(str, Enum):
    EXACT = "exact"
    DETECTION_NAME = "detection_name"
    GENERIC = "generic"
    UNKNOWN = "unknown"


class SubstanceResolver:
    def __init__(self, catalog: Optional[SubstanceCatalog] = None):
        self._catalog = catalog if catalog is not None else SubstanceCatalog()
        # Built once: (detection_name, record) in catalog order
        self._detection_index: List[Tuple[str, SubstanceRecord]] = [
            (name, rec) for rec in self._catalog for name in rec.detection_names
        ]
        self._generic_terms = self._catalog.generic_terms()

    @property
    def catalog(self) -> SubstanceCatalog:
        return self._catalog

    def resolve_with_tier(self, token: str) -> Tuple[Resolution, MatchTier]:
        normalized = (token or "").lower()

        exact = self._catalog.get(normalized)
        if exact is not None:
            return exact, MatchTier.EXACT

        if normalized:
            for name, rec in self._detection_index:
                if name in normalized or normalized in name:
                    return rec, MatchTier.DETECTION_NAME

            for phrase, ids in self._generic_terms.items():
                if phrase in normalized:
                    records = []
                    for sid in ids:
                        rec = self._catalog.get(sid)
                        if rec is None:
                            logger.warning(
                                "RESOLVE generic term %r maps to missing id=%s; using unknown placeholder",
                                phrase, sid,
                            )
                            rec = make_unknown_substance(normalized)
                        records.append(rec)
                    return records, MatchTier.GENERIC

        logger.info("RESOLVE unknown_substance token=%s", token)
        return make_unknown_substance(token), MatchTier.UNKNOWN

    def resolve(self, token: str) -> Resolution:
        """One record for exact/detection/unknown matches; a list for generic category phrases."""
        result, _ = self.resolve_with_tier(token)
        return result

    def resolve_all(self, token: str) -> List[SubstanceRecord]:
        """Flat list of scoring units for a token."""
        result = self.resolve(token)
        return list(result) if isinstance(result, list) else [result]
