from __future__ import annotations

import logging
import time
from collections.abc import Callable, Generator
from dataclasses import dataclass
from typing import Any

from canvas_bridge.backoff import DEFAULT_RETRY_DELAY, call_with_backoff
from canvas_bridge.providers.base import ImageProviderAdapter

logger = logging.getLogger(__name__)

MIN_COUNT = 1
MAX_COUNT = 6
DEFAULT_PROMPT = "Enhance image"
# pacing keeps free-tier RPM quotas from tripping 429s
DEFAULT_PACING_SECONDS = 6.5


@dataclass
class GeneratedImage:
    index: int
    total: int
    data: bytes
    mime_type: str
    retries: int = 0


def clamp_count(value: Any) -> int:
    """Coerce a user supplied repeat count into ``[MIN_COUNT, MAX_COUNT]``."""
    try:
        count = int(float(str(value).strip() or MIN_COUNT))
    except (TypeError, ValueError, OverflowError):
        count = MIN_COUNT
    return max(MIN_COUNT, min(MAX_COUNT, count))


def run_batch(
    adapter: ImageProviderAdapter,
    model: str,
    prompt: str,
    image_b64: str,
    count: Any,
    *,
    mime_type: str = "image/png",
    pacing: float = DEFAULT_PACING_SECONDS,
    default_retry_delay: float = DEFAULT_RETRY_DELAY,
    max_retries: int | None = None,
    sleep: Callable[[float], None] | None = None,
) -> Generator[GeneratedImage, None, None]:
    """
    Generate ``count`` images one after another.

    Rate limits are waited out by ``call_with_backoff``; any other error ends
    the batch. ``pacing`` seconds pass between successive generations.
    """
    sleep = sleep or time.sleep
    total = clamp_count(count)
    prompt = prompt or DEFAULT_PROMPT

    for index in range(1, total + 1):
        waits: list[float] = []
        data, out_mime = call_with_backoff(
            lambda: adapter.generate(model, prompt, image_b64, mime_type),
            default_delay=default_retry_delay,
            max_retries=max_retries,
            sleep=sleep,
            on_wait=lambda attempt, seconds, _err: waits.append(seconds),
        )
        if data:
            yield GeneratedImage(index=index, total=total, data=data, mime_type=out_mime, retries=len(waits))
        else:
            logger.warning("%s returned an empty image for %s (%d/%d)", adapter.label, model, index, total)
        if index < total and pacing > 0:
            sleep(pacing)
