from __future__ import annotations

RATE_LIMIT_STATUS = 429


class CanvasBridgeError(RuntimeError):
    """Base class for every failure surfaced to the user as a status message."""


class ProviderHTTPError(CanvasBridgeError):
    """Raised when an image provider answers with a non-2xx status."""

    def __init__(
        self,
        provider: str,
        status_code: int,
        body: str,
        *,
        retry_after: str | None = None,
    ) -> None:
        self.provider = provider
        self.status_code = status_code
        self.body = body
        self.retry_after = retry_after
        super().__init__(f"{provider} HTTP {status_code}: {body}")

    @property
    def is_rate_limited(self) -> bool:
        return self.status_code == RATE_LIMIT_STATUS


class NoImageInResponseError(CanvasBridgeError):
    """Raised when a successful response carries no image."""


class CanvasNotExportedError(CanvasBridgeError):
    """Raised when generation is requested before the host sent a canvas."""


class UnknownProviderError(CanvasBridgeError):
    """Raised for a provider name that has no adapter."""
