"""Shared HTTP plumbing for the image provider adapters."""

from __future__ import annotations

import base64
import binascii
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any

import requests

from canvas_bridge.errors import NoImageInResponseError, ProviderHTTPError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 180.0


def unique_sorted(models: Iterable[str]) -> list[str]:
    return sorted({m for m in models if m})


def decode_image(b64_data: str, provider: str) -> bytes:
    try:
        return base64.b64decode(b64_data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise NoImageInResponseError(f"{provider} returned malformed image data: {e}") from e


class ImageProviderAdapter(ABC):
    """
    Translate a (prompt, image) pair into one provider's request shape.

    Subclasses build the payload and pick the image out of the response;
    transport, auth headers and error mapping live here.
    """

    name: str = ""
    label: str = ""
    fallback_models: tuple[str, ...] = ()

    def __init__(
        self,
        api_key: str,
        *,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        if not api_key:
            raise ValueError("api_key is required")
        self._api_key = api_key
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._timeout = timeout

    def close(self) -> None:
        """Close the HTTP session unless the caller supplied it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    @abstractmethod
    def generate(self, model: str, prompt: str, image_b64: str, mime_type: str = "image/png") -> tuple[bytes, str]:
        """Return ``(image_bytes, mime_type)`` for one generation."""

    def list_models(self) -> list[str]:
        return unique_sorted(self.fallback_models)

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    @abstractmethod
    def _auth_headers(self) -> dict[str, str]:
        ...

    def _request(
        self,
        method: str,
        url: str,
        *,
        payload: Mapping[str, Any] | None = None,
    ) -> Mapping[str, Any]:
        headers = self._auth_headers()
        if payload is not None:
            headers["Content-Type"] = "application/json"
        response = self._session.request(
            method,
            url,
            headers=headers,
            json=payload,
            timeout=self._timeout,
        )
        if not response.ok:
            raise ProviderHTTPError(
                self.label,
                response.status_code,
                response.text,
                retry_after=response.headers.get("Retry-After"),
            )
        if not response.text:
            return {}
        try:
            data = response.json()
        except ValueError as e:
            raise NoImageInResponseError(f"Invalid JSON response from {self.label}") from e
        return data if isinstance(data, Mapping) else {}
