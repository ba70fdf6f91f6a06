"""
Feature flags, paths, and centralized configuration.
All resolution relative to the backend directory.
"""
import os
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# Repo root: backend/core/config.py -> parent=core, parent.parent=backend, parent.parent.parent=repo
_BACKEND_DIR = Path(__file__).resolve().parent.parent
_REPO_ROOT = _BACKEND_DIR.parent


# --- Data paths ---
def get_catalog_path() -> Path:
    override = os.environ.get("CATALOG_PATH", "").strip()
    if override:
        return Path(override)
    return _REPO_ROOT / "data" / "substances.json"


def get_products_path() -> Path:
    override = os.environ.get("PRODUCTS_PATH", "").strip()
    if override:
        return Path(override)
    return _REPO_ROOT / "data" / "products.json"


# --- External APIs (lazy read from env) ---
def get_open_food_facts_enabled() -> bool:
    return os.environ.get("OPEN_FOOD_FACTS_ENABLED", "false").lower() in ("1", "true", "yes")


def get_open_food_facts_url() -> str:
    return os.environ.get("OPEN_FOOD_FACTS_URL", "https://world.openfoodfacts.org/api/v0/product")


# HTTP timeout for product lookups (seconds)
OPEN_FOOD_FACTS_TIMEOUT = int(os.environ.get("OPEN_FOOD_FACTS_TIMEOUT", "10"))


# --- Startup logging ---
def log_config() -> None:
    logger.info(
        "CONFIG: catalog=%s catalog_exists=%s products=%s products_exists=%s "
        "off_enabled=%s off_timeout=%ds",
        get_catalog_path(), get_catalog_path().exists(),
        get_products_path(), get_products_path().exists(),
        get_open_food_facts_enabled(), OPEN_FOOD_FACTS_TIMEOUT,
    )
