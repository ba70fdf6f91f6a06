"""
HTTP GET with retries for the product lookup fallback.
Retries connection errors, timeouts, and throttled/unavailable responses
(429, 5xx) with exponential backoff; a numeric Retry-After header wins.
"""
import logging
import time
from typing import Optional, Tuple

import requests

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3
DEFAULT_INITIAL_BACKOFF = 1.0
RETRY_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


def _retry_delay(resp: Optional[requests.Response], attempt: int, initial_backoff: float) -> float:
    retry_after = resp.headers.get("Retry-After") if resp is not None else None
    if isinstance(retry_after, str) and retry_after.isdigit():
        return float(retry_after)
    return initial_backoff * (2 ** attempt)


def get_with_retries(
    url: str,
    headers: Optional[dict] = None,
    timeout: int = 10,
    max_retries: int = DEFAULT_MAX_RETRIES,
    initial_backoff: float = DEFAULT_INITIAL_BACKOFF,
) -> Tuple[Optional[requests.Response], Optional[str]]:
    """
    Returns (response, None) once a response is usable, (None, error_message)
    when every attempt raised. A retryable status on the last attempt is
    returned as-is so the caller can log it.
    """
    last_error: Optional[str] = None
    for attempt in range(max_retries):
        resp: Optional[requests.Response] = None
        try:
            resp = requests.get(url, headers=headers, timeout=timeout)
        except requests.RequestException as e:
            last_error = f"{type(e).__name__}: {e}"
        else:
            if resp.status_code not in RETRY_STATUS_CODES or attempt == max_retries - 1:
                return resp, None
            last_error = f"HTTP {resp.status_code}"
        logger.warning(
            "EXTERNAL_API retry attempt=%s/%s url=%s error=%s",
            attempt + 1, max_retries, url[:80], last_error,
        )
        if attempt < max_retries - 1:
            delay = _retry_delay(resp, attempt, initial_backoff)
            logger.info("EXTERNAL_API backoff %.1fs before retry", delay)
            time.sleep(delay)
    return None, last_error
