"""
Substance catalog. Loads data/substances.json once; read-only afterwards.
Iteration order is the file's declaration order and decides detection-name tie-breaks.
"""
from pathlib import Path
from typing import Iterable, Iterator, Optional
import json
import logging

from .substance_schema import SubstanceRecord
from core.config import get_catalog_path
from core.errors import DataIntegrityError

logger = logging.getLogger(__name__)


class SubstanceCatalog:
    """
    Ordered substance records keyed by id, plus the generic-term table
    (category phrase -> ordered substance ids).
    """

    def __init__(self, catalog_path: Optional[Path] = None):
        self._path = catalog_path or get_catalog_path()
        self._by_id: dict[str, SubstanceRecord] = {}
        self._generic_terms: dict[str, list[str]] = {}
        self._version: str = "0"
        self._load()

    @classmethod
    def from_records(
        cls,
        records: Iterable[SubstanceRecord],
        generic_terms: Optional[dict[str, list[str]]] = None,
        version: str = "0",
    ) -> "SubstanceCatalog":
        """Build a catalog in memory (no file). Same invariants as a file load."""
        catalog = cls.__new__(cls)
        catalog._path = None
        catalog._by_id = {}
        catalog._generic_terms = {}
        catalog._version = version
        for rec in records:
            catalog._add(rec)
        catalog._set_generic_terms(generic_terms or {})
        return catalog

    def _load(self) -> None:
        if not self._path.exists():
            logger.warning("CATALOG_LOAD file not found at %s; catalog empty.", self._path)
            return
        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise DataIntegrityError(f"Catalog file {self._path} is not valid JSON: {e}") from e
        self._version = str(data.get("catalog_version", "0"))
        for item in data.get("substances", []):
            if "id" not in item:
                raise DataIntegrityError(f"Catalog entry without id in {self._path}")
            self._add(SubstanceRecord.from_dict(item))
        self._set_generic_terms(data.get("generic_terms", {}) or {})
        logger.info(
            "CATALOG_LOAD loaded %d substances and %d generic terms from %s (version=%s)",
            len(self._by_id), len(self._generic_terms), self._path, self._version,
        )

    def _add(self, record: SubstanceRecord) -> None:
        if record.id in self._by_id:
            raise DataIntegrityError("Duplicate substance id in catalog", substance_id=record.id)
        if not record.detection_names:
            raise DataIntegrityError("Substance has no detection names", substance_id=record.id)
        self._by_id[record.id] = record

    def _set_generic_terms(self, terms: dict[str, list[str]]) -> None:
        for phrase, ids in terms.items():
            self._generic_terms[phrase.lower()] = list(ids)
            missing = [sid for sid in ids if sid not in self._by_id]
            if missing:
                # Resolved to unknown placeholders at lookup time
                logger.warning("CATALOG_LOAD generic term %r maps to missing ids %s", phrase, missing)

    def get(self, substance_id: str) -> Optional[SubstanceRecord]:
        return self._by_id.get(substance_id)

    def generic_terms(self) -> dict[str, list[str]]:
        return dict(self._generic_terms)

    def list_ids(self) -> list[str]:
        return list(self._by_id.keys())

    def get_version(self) -> str:
        return self._version

    def __iter__(self) -> Iterator[SubstanceRecord]:
        return iter(self._by_id.values())

    def __contains__(self, substance_id: object) -> bool:
        return substance_id in self._by_id

    def __len__(self) -> int:
        return len(self._by_id)
