"""
Product records resolved from a barcode, and healthier alternatives.
"""
from dataclasses import dataclass, field
from typing import Optional

UNKNOWN_PRODUCT = "Unknown"
UNKNOWN_BATCH = "Unknown"


@dataclass(frozen=True)
class ProductRecord:
    product: str
    ingredients: list[str] = field(default_factory=list)
    batch_code: str = UNKNOWN_BATCH
    barcode: Optional[str] = None
    source: str = "local"  # "local" | "open_food_facts" | "none"

    @property
    def is_unknown(self) -> bool:
        return self.product == UNKNOWN_PRODUCT and not self.ingredients

    def to_dict(self) -> dict:
        return {
            "product": self.product,
            "ingredients": list(self.ingredients),
            "batch_code": self.batch_code,
            "barcode": self.barcode,
            "source": self.source,
        }

    @classmethod
    def from_dict(cls, d: dict, barcode: Optional[str] = None) -> "ProductRecord":
        return cls(
            product=d.get("product", UNKNOWN_PRODUCT) or UNKNOWN_PRODUCT,
            ingredients=list(d.get("ingredients", []) or []),
            batch_code=d.get("batch_code", UNKNOWN_BATCH) or UNKNOWN_BATCH,
            barcode=barcode or d.get("barcode"),
            source=d.get("source", "local"),
        )

    @classmethod
    def unknown(cls, barcode: Optional[str] = None) -> "ProductRecord":
        return cls(product=UNKNOWN_PRODUCT, ingredients=[], batch_code=UNKNOWN_BATCH, barcode=barcode, source="none")


@dataclass(frozen=True)
class AlternativeProduct:
    product: str
    ingredients: list[str] = field(default_factory=list)
    score: int = 0

    def to_dict(self) -> dict:
        return {"product": self.product, "ingredients": list(self.ingredients), "score": self.score}

    @classmethod
    def from_dict(cls, d: dict) -> "AlternativeProduct":
        return cls(
            product=d["product"],
            ingredients=list(d.get("ingredients", []) or []),
            score=int(d.get("score", 0)),
        )
