"""
API tests with FastAPI's TestClient (shipped catalog and product table).
Run from repo root: python -m pytest backend/tests/test_app.py -v
"""
import pytest


@pytest.fixture(scope="module")
def client():
    from core.config import get_catalog_path
    if not get_catalog_path().exists():
        pytest.skip("substances.json not found")
    from fastapi.testclient import TestClient
    from app import app
    return TestClient(app)


def test_health_check(client):
    resp = client.get("/")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["substances"] == 14


def test_analyze_text(client):
    resp = client.post("/analyze", json={"text": "Ingredients: Sugar, E102, Water, E621"})
    assert resp.status_code == 200
    body = resp.json()
    scan = body["scan"]
    assert scan["product"] == "Manually Entered Product"
    assert scan["ingredients"] == ["sugar", "e102", "water", "e621"]
    assert scan["analysis"]["clean_score"] == 25
    assert scan["analysis"]["regulatory_score"] == 96
    assert scan["analysis"]["warnings"] == []
    assert len(body["history"]) == 1
    assert body["history"][0]["overall_score"] == scan["analysis"]["overall_score"]


def test_analyze_text_with_profile_and_history(client):
    payload = {
        "text": "sugar, e102, water, e621",
        "profile": {"age": 10, "dietary_preferences": ["diabetic"], "pregnancy_status": "not_pregnant"},
        "history": [
            {"date": "2025-01-01T10:00:00Z", "overall_score": 10},
            {"date": "2025-01-02T10:00:00Z", "overall_score": 10},
            {"date": "2025-01-03T10:00:00Z", "overall_score": 10},
        ],
    }
    resp = client.post("/analyze", json=payload)
    assert resp.status_code == 200
    analysis = resp.json()["scan"]["analysis"]
    assert analysis["trend"] == "Improving"
    assert "Warning: Tartrazine may be harmful for Children under 12, Asthmatics" in analysis["warnings"]
    assert "Warning: Sugar (all forms) may be harmful for Diabetics" in analysis["warnings"]
    assert len(resp.json()["history"]) == 4


def test_analyze_rejects_empty_text(client):
    resp = client.post("/analyze", json={"text": "   "})
    assert resp.status_code == 400


def test_analyze_rejects_bad_history_date(client):
    resp = client.post("/analyze", json={"text": "sugar", "history": [{"date": "yesterday", "overall_score": 5}]})
    assert resp.status_code == 422


def test_analyze_barcode_known(client):
    resp = client.post("/analyze/barcode", json={"barcode": "012345678905"})
    assert resp.status_code == 200
    scan = resp.json()["scan"]
    assert scan["product"] == "Sample Soda"
    assert scan["batch_code"] == "2024-10-01"
    assert scan["ingredients"] == ["sugar", "e102", "water", "e621"]
    assert [a["product"] for a in scan["alternatives"]] == ["Natural Juice"]


def test_analyze_barcode_unknown(client):
    from app import products
    if products._use_off:
        pytest.skip("Open Food Facts fallback enabled in environment")
    resp = client.post("/analyze/barcode", json={"barcode": "000000000000"})
    assert resp.status_code == 200
    scan = resp.json()["scan"]
    assert scan["product"] == "Unknown"
    assert scan["ingredients"] == []
    assert scan["analysis"]["overall_score"] == 100


def test_get_substance(client):
    resp = client.get("/substances/E102")
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "Tartrazine"
    assert body["adi_display"] == "7.5 mg/kg body weight"
    assert client.get("/substances/e621").json()["adi_display"] == "Not established"


def test_get_substance_unknown(client):
    resp = client.get("/substances/nope")
    assert resp.status_code == 404
