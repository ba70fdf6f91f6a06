"""
Barcode product records: local table plus Open Food Facts fallback.
"""
from .product_schema import ProductRecord, AlternativeProduct
from .product_catalog import ProductCatalog
from .open_food_facts import fetch_open_food_facts_product

__all__ = [
    "ProductRecord",
    "AlternativeProduct",
    "ProductCatalog",
    "fetch_open_food_facts_product",
]
