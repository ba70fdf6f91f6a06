"""
Open Food Facts product connector (no key required).
Product: https://world.openfoodfacts.org/api/v0/product/<barcode>.json
Used only as a fallback for barcodes missing from data/products.json.
"""
import logging
from typing import Optional

from core.config import get_open_food_facts_url, OPEN_FOOD_FACTS_TIMEOUT
from core.products.http_retry import DEFAULT_INITIAL_BACKOFF, get_with_retries
from core.products.product_schema import ProductRecord

logger = logging.getLogger(__name__)

_HEADERS = {"User-Agent": "FoodRisk/0.1 (ingredient risk analysis)"}


def _ingredients_from_product(product: dict) -> list[str]:
    structured = product.get("ingredients") or []
    names = [i.get("text", "").strip() for i in structured if isinstance(i, dict) and i.get("text")]
    if names:
        return names
    text = product.get("ingredients_text_en") or product.get("ingredients_text") or ""
    return [part.strip() for part in text.split(",") if part.strip()]


def fetch_open_food_facts_product(barcode: str, initial_backoff: float = DEFAULT_INITIAL_BACKOFF) -> Optional[ProductRecord]:
    """Look up a barcode. Returns None when the product is unknown or the API is unreachable."""
    url = f"{get_open_food_facts_url().rstrip('/')}/{barcode}.json"
    resp, err = get_with_retries(
        url, headers=_HEADERS, timeout=OPEN_FOOD_FACTS_TIMEOUT, initial_backoff=initial_backoff,
    )
    if resp is None:
        logger.warning("EXTERNAL_API open_food_facts unreachable barcode=%s error=%s", barcode, err)
        return None
    if resp.status_code != 200:
        logger.info("EXTERNAL_API open_food_facts status=%s barcode=%s", resp.status_code, barcode)
        return None
    try:
        data = resp.json()
    except ValueError as e:
        logger.warning("EXTERNAL_API open_food_facts invalid JSON barcode=%s error=%s", barcode, e)
        return None
    if data.get("status") != 1 or not data.get("product"):
        logger.info("EXTERNAL_API open_food_facts product_not_found barcode=%s", barcode)
        return None
    product = data["product"]
    record = ProductRecord(
        product=product.get("product_name") or "Unknown",
        ingredients=_ingredients_from_product(product),
        batch_code="Unknown",
        barcode=barcode,
        source="open_food_facts",
    )
    logger.info(
        "EXTERNAL_API open_food_facts hit barcode=%s product=%s ingredients=%d",
        barcode, record.product[:60], len(record.ingredients),
    )
    return record
