from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import requests

from canvas_bridge.errors import CanvasBridgeError, NoImageInResponseError
from canvas_bridge.providers.base import ImageProviderAdapter, decode_image, unique_sorted

logger = logging.getLogger(__name__)


class GoogleAdapter(ImageProviderAdapter):
    """Gemini ``generateContent`` with the canvas sent as inline data."""

    name = "google"
    label = "Gemini"
    BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
    fallback_models = (
        "gemini-2.5-flash-image",
        "gemini-2.0-flash-preview-image",
        "gemini-2.5-flash",
        "gemini-2.5-pro",
    )

    def _auth_headers(self) -> dict[str, str]:
        return {"x-goog-api-key": self._api_key}

    def generate(self, model: str, prompt: str, image_b64: str, mime_type: str = "image/png") -> tuple[bytes, str]:
        url = f"{self.BASE_URL}/models/{quote(model, safe='')}:generateContent"
        payload = {
            "contents": [
                {
                    "parts": [
                        {"text": prompt},
                        {"inline_data": {"mime_type": mime_type, "data": image_b64}},
                    ]
                }
            ]
        }
        data = self._request("POST", url, payload=payload)
        inline = self.find_inline_image(data)
        if not inline:
            raise NoImageInResponseError("No image in response (model may be text-only)")
        return decode_image(inline["data"], self.label), inline.get("mime_type") or inline.get("mimeType") or "image/png"

    @staticmethod
    def find_inline_image(data: Mapping[str, Any]) -> Mapping[str, Any] | None:
        # REST answers use camelCase, older samples snake_case
        candidates = data.get("candidates")
        if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], Mapping):
            return None
        content = candidates[0].get("content")
        parts = content.get("parts") if isinstance(content, Mapping) else None
        if not isinstance(parts, list):
            return None
        for part in parts:
            if not isinstance(part, Mapping):
                continue
            inline = part.get("inline_data") or part.get("inlineData")
            if isinstance(inline, Mapping) and inline.get("data"):
                return inline
        return None

    def fetch_models(self) -> list[str]:
        """List model ids that support ``generateContent``; raises on HTTP failure."""
        data = self._request("GET", f"{self.BASE_URL}/models")
        models = data.get("models")
        if not isinstance(models, list):
            return []
        ids = []
        for model in models:
            if not isinstance(model, Mapping):
                continue
            methods = model.get("supportedGenerationMethods")
            if methods and "generateContent" not in methods:
                continue
            model_id = (model.get("name") or "").split("/")[-1]
            if model_id:
                ids.append(model_id)
        return ids

    def list_models(self) -> list[str]:
        try:
            models = self.fetch_models()
        except (CanvasBridgeError, requests.RequestException) as e:
            logger.warning("Google list models failed: %s", e)
            models = []
        if not models:
            logger.warning("Models endpoint returned none; using Google fallback list")
            models = list(self.fallback_models)
        return unique_sorted(models)
