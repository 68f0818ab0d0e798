"""Retry classification and backoff for outbound message delivery."""

import random
from typing import Callable

MAX_ATTEMPTS = 3
INITIAL_RETRY_DELAY_MS = 1000
MAX_RETRY_DELAY_MS = 10000
MAX_JITTER_MS = 500

NETWORK_ERROR_CODES = ("ECONNRESET", "ETIMEDOUT", "ENOTFOUND", "ECONNREFUSED")


def is_retryable(status_code: int, error: str | None = None) -> bool:
    """Decide whether a failed attempt is worth repeating.

    5xx and 429 are transient; any other 4xx is permanent. Without an HTTP
    status, only recognised network errors are retried.
    """
    if status_code >= 500 or status_code == 429:
        return True
    if 400 <= status_code < 500:
        return False
    return bool(error) and any(code in error for code in NETWORK_ERROR_CODES)


def random_jitter_ms() -> float:
    return random.uniform(0, MAX_JITTER_MS)


def backoff_delay_ms(attempt: int, jitter: Callable[[], float] = random_jitter_ms) -> float:
    """Delay after failed ``attempt`` (1-based): 1s, 2s, 4s... plus jitter, capped at 10s."""
    delay = INITIAL_RETRY_DELAY_MS * 2 ** (attempt - 1)
    return min(delay + jitter(), MAX_RETRY_DELAY_MS)
