"""Rate-limit retry loop shared by every provider adapter.

Only HTTP 429 is retried. The wait comes from the ``retryDelay`` hint Google
embeds in its error body, then from a ``Retry-After`` header, and finally from
a fixed default. Everything else is raised to the caller untouched.
"""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable
from typing import TypeVar

from canvas_bridge.errors import ProviderHTTPError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_RETRY_DELAY = 40.0

_RETRY_DELAY_PATTERN = re.compile(r'"retryDelay"\s*:\s*"(\d+(?:\.\d+)?)s"', re.IGNORECASE)


def parse_retry_delay_seconds(text: str | None) -> float | None:
    """Return the ``retryDelay`` seconds embedded in an error body, if any."""
    if not text:
        return None
    match = _RETRY_DELAY_PATTERN.search(text)
    if not match:
        return None
    value = float(match.group(1))
    return int(value) if value.is_integer() else value


def _parse_retry_after(header: str | None) -> float | None:
    if not header:
        return None
    try:
        return float(header)
    except ValueError:
        # HTTP-date form is not worth supporting here
        return None


def resolve_retry_delay(error: ProviderHTTPError, default: float = DEFAULT_RETRY_DELAY) -> float:
    delay = parse_retry_delay_seconds(error.body) or _parse_retry_after(error.retry_after)
    return delay or default


def call_with_backoff(
    call: Callable[[], T],
    *,
    default_delay: float = DEFAULT_RETRY_DELAY,
    max_retries: int | None = None,
    sleep: Callable[[float], None] | None = None,
    on_wait: Callable[[int, float, ProviderHTTPError], None] | None = None,
) -> T:
    """
    Invoke ``call`` until it succeeds or fails with something other than a 429.

    With ``max_retries`` left as ``None`` the loop never gives up on rate
    limiting; otherwise the last rate-limit error is raised once the budget is
    spent. ``on_wait(attempt, seconds, error)`` runs before each wait.
    """
    sleep = sleep or time.sleep
    attempt = 0
    while True:
        try:
            return call()
        except ProviderHTTPError as e:
            if not e.is_rate_limited:
                raise
            attempt += 1
            if max_retries is not None and attempt > max_retries:
                raise
            delay = resolve_retry_delay(e, default_delay)
            logger.info(
                "429 from %s, waiting %ss before retry #%d",
                e.provider,
                delay,
                attempt,
            )
            if on_wait:
                on_wait(attempt, delay, e)
            sleep(delay)
