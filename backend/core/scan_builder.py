"""
Scan record assembly: text or product record -> tokens -> score -> ScanResult.
Appends {date, overall_score} to the caller's history list on every build.
"""
import logging
from typing import List, Optional, Sequence

from core.evaluation.risk_scorer import Clock, RiskScorer, utc_now
from core.models.analysis import ScanHistoryEntry
from core.models.scan_result import ScanResult
from core.models.user_profile import UserProfile
from core.normalization.normalizer import join_product_ingredients, normalize_ingredient_text
from core.products.product_schema import AlternativeProduct, ProductRecord

logger = logging.getLogger(__name__)

MANUAL_PRODUCT_NAME = "Manually Entered Product"


class ScanRecordBuilder:
    def __init__(self, scorer: Optional[RiskScorer] = None, clock: Optional[Clock] = None):
        self._clock = clock or utc_now
        self._scorer = scorer or RiskScorer(clock=self._clock)

    @property
    def scorer(self) -> RiskScorer:
        return self._scorer

    def build(
        self,
        product: str,
        tokens: Sequence[str],
        profile: Optional[UserProfile],
        history: List[ScanHistoryEntry],
        batch_code: str = "Unknown",
        alternatives: Sequence[AlternativeProduct] = (),
    ) -> ScanResult:
        """Score tokens and append the result to history (the caller trims history if it wants)."""
        analysis = self._scorer.score(tokens, profile, history)
        ingredients = tuple(tokens) if isinstance(tokens, (list, tuple)) else ()
        history.append(ScanHistoryEntry(date=self._clock(), overall_score=analysis.overall_score))
        logger.info(
            "SCAN_BUILD product=%s tokens=%d overall=%s trend=%s history_len=%d",
            product[:60], len(ingredients), analysis.overall_score, analysis.trend.value, len(history),
        )
        return ScanResult(
            product=product,
            ingredients=ingredients,
            analysis=analysis,
            batch_code=batch_code,
            alternatives=tuple(alternatives),
        )

    def from_text(
        self,
        raw_text: str,
        profile: Optional[UserProfile],
        history: List[ScanHistoryEntry],
        product: str = MANUAL_PRODUCT_NAME,
        batch_code: str = "Unknown",
    ) -> ScanResult:
        """OCR output or typed ingredient text."""
        tokens = normalize_ingredient_text(raw_text)
        return self.build(product, tokens, profile, history, batch_code=batch_code)

    def from_product(
        self,
        record: ProductRecord,
        profile: Optional[UserProfile],
        history: List[ScanHistoryEntry],
        alternatives: Sequence[AlternativeProduct] = (),
    ) -> ScanResult:
        """Barcode entry: ingredients are comma-joined and go through the same normalizer."""
        tokens = normalize_ingredient_text(join_product_ingredients(record.ingredients))
        return self.build(
            record.product, tokens, profile, history,
            batch_code=record.batch_code, alternatives=alternatives,
        )
