"""
FoodRisk ingredient analysis API.

Endpoints:
    GET  /                          Health check
    POST /analyze                   Ingredient text -> normalize -> resolve -> score
    POST /analyze/barcode           Barcode -> product record -> same pipeline
    GET  /substances/{substance_id} Catalog entry with formatted ADI

Stateless: the caller sends its profile and scan history with each request and
gets the appended history back.
"""
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import Any, Dict, List, Optional
import logging
from dotenv import load_dotenv
from pathlib import Path

# Load env vars
load_dotenv(Path(__file__).parent / ".env")

# Logger
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

from core.config import log_config
from core.catalog.substance_catalog import SubstanceCatalog
from core.catalog.substance_schema import format_adi
from core.errors import DataIntegrityError
from core.evaluation.risk_scorer import RiskScorer
from core.models.analysis import ScanHistoryEntry
from core.models.scan_result import ScanResult
from core.models.user_profile import UserProfile
from core.products.product_catalog import ProductCatalog
from core.resolution.substance_resolver import SubstanceResolver
from core.scan_builder import MANUAL_PRODUCT_NAME, ScanRecordBuilder

log_config()

# Initialize App
app = FastAPI(title="FoodRisk Ingredient Analysis API")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Engine (catalog loaded once, read-only afterwards) ---
catalog = SubstanceCatalog()
products = ProductCatalog()
builder = ScanRecordBuilder(RiskScorer(SubstanceResolver(catalog)))


# --- Request/Response Models ---
class ProfileBody(BaseModel):
    age: int = 30
    dietary_preferences: List[str] = []
    pregnancy_status: str = "not_pregnant"


class HistoryEntryBody(BaseModel):
    date: str
    overall_score: float


class AnalyzeRequest(BaseModel):
    text: str
    product: Optional[str] = None
    batch_code: Optional[str] = None
    profile: Optional[ProfileBody] = None
    history: List[HistoryEntryBody] = []


class BarcodeRequest(BaseModel):
    barcode: str
    profile: Optional[ProfileBody] = None
    history: List[HistoryEntryBody] = []


class AnalyzeResponse(BaseModel):
    scan: Dict[str, Any]
    history: List[Dict[str, Any]]


# --- Helper Functions ---

def _profile_from_body(body: Optional[ProfileBody]) -> UserProfile:
    if body is None:
        return UserProfile()
    try:
        return UserProfile.from_dict(body.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


def _history_from_body(entries: List[HistoryEntryBody]) -> List[ScanHistoryEntry]:
    try:
        return [ScanHistoryEntry.from_dict(e.model_dump()) for e in entries]
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Invalid history date: {e}")


def _response(scan: ScanResult, history: List[ScanHistoryEntry]) -> dict:
    return {"scan": scan.to_dict(), "history": [h.to_dict() for h in history]}


# --- Endpoints ---

@app.get("/")
def health_check():
    return {"status": "ok", "service": "FoodRisk", "catalog_version": catalog.get_version(), "substances": len(catalog)}


@app.post("/analyze", response_model=AnalyzeResponse)
def analyze_text(request: AnalyzeRequest):
    """Ingredient text (typed or OCR output) -> scan result."""
    if not request.text.strip():
        raise HTTPException(status_code=400, detail="Please enter ingredients.")
    profile = _profile_from_body(request.profile)
    history = _history_from_body(request.history)
    try:
        scan = builder.from_text(
            request.text,
            profile,
            history,
            product=request.product or MANUAL_PRODUCT_NAME,
            batch_code=request.batch_code or "Unknown",
        )
    except DataIntegrityError as e:
        logger.error("Analyze failed on corrupt catalog entry: %s", e)
        raise HTTPException(status_code=500, detail=str(e))
    logger.info("Analyze product=%s overall=%s", scan.product, scan.analysis.overall_score)
    return _response(scan, history)


@app.post("/analyze/barcode", response_model=AnalyzeResponse)
def analyze_barcode(request: BarcodeRequest):
    """Barcode -> product record -> scan result with healthier alternatives."""
    profile = _profile_from_body(request.profile)
    history = _history_from_body(request.history)
    record = products.lookup(request.barcode)
    try:
        scan = builder.from_product(
            record,
            profile,
            history,
            alternatives=products.alternatives_for(record.product),
        )
    except DataIntegrityError as e:
        logger.error("Barcode analyze failed on corrupt catalog entry: %s", e)
        raise HTTPException(status_code=500, detail=str(e))
    logger.info("Barcode analyze barcode=%s product=%s source=%s", request.barcode, record.product, record.source)
    return _response(scan, history)


@app.get("/substances/{substance_id}")
def get_substance(substance_id: str):
    """Catalog entry for detail display."""
    rec = catalog.get(substance_id.lower())
    if rec is None:
        raise HTTPException(status_code=404, detail=f"Unknown substance: {substance_id}")
    data = rec.to_dict()
    data["adi_display"] = format_adi(rec.adi)
    return data


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app:app", host="0.0.0.0", port=8000, reload=True)
