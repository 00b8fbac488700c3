"""
Canvas image generation bridge.

Sends an exported canvas plus a prompt to Gemini, OpenRouter or CometAPI and
hands the returned images back to the host, waiting out rate limits and
pacing successive generations.
"""

from canvas_bridge.backoff import call_with_backoff, parse_retry_delay_seconds
from canvas_bridge.batch import GeneratedImage, clamp_count, run_batch
from canvas_bridge.errors import (
    CanvasBridgeError,
    CanvasNotExportedError,
    NoImageInResponseError,
    ProviderHTTPError,
    UnknownProviderError,
)
from canvas_bridge.providers import get_adapter, get_adapter_class
from canvas_bridge.session import CanvasSession

__all__ = [
    "CanvasBridgeError",
    "CanvasNotExportedError",
    "CanvasSession",
    "GeneratedImage",
    "NoImageInResponseError",
    "ProviderHTTPError",
    "UnknownProviderError",
    "call_with_backoff",
    "clamp_count",
    "get_adapter",
    "get_adapter_class",
    "parse_retry_delay_seconds",
    "run_batch",
]
