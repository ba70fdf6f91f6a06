"""
Unit tests for core path resolution and env-driven config.
Run from repo root: python -m pytest backend/tests/test_core_paths.py -v
"""
import pytest
from pathlib import Path


def test_backend_is_current_or_on_path():
    """Ensure tests run with backend on path so 'core' resolves."""
    try:
        from core import config
    except ImportError:
        pytest.skip("Run tests with backend on sys.path (see pyproject pytest config)")
        return
    assert config._BACKEND_DIR.is_dir()
    assert (config._BACKEND_DIR / "core").is_dir()
    assert config._REPO_ROOT.is_dir()
    assert config._REPO_ROOT.name != "core"


def test_catalog_path_resolution(monkeypatch):
    """Catalog path is repo_root/data/substances.json unless overridden."""
    from core.config import get_catalog_path, _REPO_ROOT
    monkeypatch.delenv("CATALOG_PATH", raising=False)
    path = get_catalog_path()
    assert path == _REPO_ROOT / "data" / "substances.json"
    assert "data" in path.parts


def test_products_path_resolution(monkeypatch):
    from core.config import get_products_path, _REPO_ROOT
    monkeypatch.delenv("PRODUCTS_PATH", raising=False)
    assert get_products_path() == _REPO_ROOT / "data" / "products.json"


def test_path_overrides_from_env(monkeypatch, tmp_path):
    from core.config import get_catalog_path, get_products_path
    monkeypatch.setenv("CATALOG_PATH", str(tmp_path / "c.json"))
    monkeypatch.setenv("PRODUCTS_PATH", str(tmp_path / "p.json"))
    assert get_catalog_path() == Path(tmp_path / "c.json")
    assert get_products_path() == Path(tmp_path / "p.json")


def test_open_food_facts_flag(monkeypatch):
    from core.config import get_open_food_facts_enabled
    monkeypatch.delenv("OPEN_FOOD_FACTS_ENABLED", raising=False)
    assert get_open_food_facts_enabled() is False
    monkeypatch.setenv("OPEN_FOOD_FACTS_ENABLED", "yes")
    assert get_open_food_facts_enabled() is True


def test_catalog_file_exists_when_data_present():
    """When data/ exists in repo, substances.json should exist."""
    from core.config import _REPO_ROOT
    data_dir = _REPO_ROOT / "data"
    if not data_dir.exists():
        pytest.skip("data/ directory not found")
    assert (data_dir / "substances.json").exists()
    assert (data_dir / "products.json").exists()
