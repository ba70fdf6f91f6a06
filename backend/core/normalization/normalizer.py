"""
Deterministic normalization of raw ingredient text (OCR output, typed text, or a
barcode product's ingredient list) into ordered ingredient tokens.
No catalog lookups here; resolution happens in core.resolution.
"""
import re
import logging
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

_LABEL_RE = re.compile(r"^\s*ingredients?:?\s*", re.IGNORECASE)
# Lowercase "and", newline, tab, or 2+ whitespace act as list separators
_SEPARATOR_RE = re.compile(r"\band\b|\n|\t|\s{2,}")
_MARKUP_RE = re.compile(r"[<>]")
_SPLIT_RE = re.compile(r"[,;]")
# Brand / company boilerplate printed next to ingredient lists (plain substring match)
_BOILERPLATE_RE = re.compile(r"brand|company|inc|ltd", re.IGNORECASE)


def normalize_ingredient_text(raw_text: Optional[str]) -> List[str]:
    """
    Split raw ingredient text into lowercase tokens, preserving list order.
    Empty input yields an empty list.
    """
    if not raw_text or not isinstance(raw_text, str):
        return []
    text = _LABEL_RE.sub("", raw_text, count=1)
    text = _SEPARATOR_RE.sub(",", text)
    text = _MARKUP_RE.sub("", text.strip())
    tokens = []
    for piece in _SPLIT_RE.split(text):
        token = piece.strip().lower()
        if not token:
            continue
        if _BOILERPLATE_RE.search(token):
            logger.debug("NORMALIZE dropped boilerplate token=%s", token)
            continue
        tokens.append(token)
    return tokens


def join_product_ingredients(ingredients: Iterable[str]) -> str:
    """Join a product record's ingredient list so it goes through the same normalizer path."""
    return ",".join(str(i) for i in (ingredients or []) if i is not None)
