"""
Barcode -> product lookup. Loads data/products.json; optional Open Food Facts
fallback for barcodes not in the local table.
"""
from pathlib import Path
from typing import Optional
import json
import logging

from core.config import get_products_path, get_open_food_facts_enabled
from core.products.product_schema import AlternativeProduct, ProductRecord

logger = logging.getLogger(__name__)


class ProductCatalog:
    def __init__(
        self,
        products_path: Optional[Path] = None,
        use_open_food_facts: Optional[bool] = None,
    ):
        self._path = products_path or get_products_path()
        self._use_off = get_open_food_facts_enabled() if use_open_food_facts is None else use_open_food_facts
        self._by_barcode: dict[str, ProductRecord] = {}
        self._alternatives: dict[str, list[AlternativeProduct]] = {}
        self._load()

    def _load(self) -> None:
        if not self._path.exists():
            logger.warning("PRODUCT_LOOKUP products file not found at %s; local table empty.", self._path)
            return
        with open(self._path, encoding="utf-8") as f:
            data = json.load(f)
        for barcode, item in (data.get("products", {}) or {}).items():
            self._by_barcode[barcode] = ProductRecord.from_dict(item, barcode=barcode)
        for name, items in (data.get("alternatives", {}) or {}).items():
            self._alternatives[name] = [AlternativeProduct.from_dict(i) for i in items]
        logger.info(
            "PRODUCT_LOOKUP loaded %d products and %d alternative sets from %s",
            len(self._by_barcode), len(self._alternatives), self._path,
        )

    def lookup(self, barcode: str) -> ProductRecord:
        """Local table first, then Open Food Facts if enabled. Unknown barcode -> empty Unknown product."""
        code = (barcode or "").strip()
        record = self._by_barcode.get(code)
        if record is not None:
            return record
        if self._use_off and code:
            from core.products.open_food_facts import fetch_open_food_facts_product
            fetched = fetch_open_food_facts_product(code)
            if fetched is not None:
                return fetched
        logger.info("PRODUCT_LOOKUP unknown barcode=%s", code)
        return ProductRecord.unknown(barcode=code or None)

    def alternatives_for(self, product_name: str) -> list[AlternativeProduct]:
        return list(self._alternatives.get(product_name, []))

    def __len__(self) -> int:
        return len(self._by_barcode)
