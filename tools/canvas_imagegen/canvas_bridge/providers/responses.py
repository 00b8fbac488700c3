from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from canvas_bridge.errors import NoImageInResponseError
from canvas_bridge.extract import find_base64_image
from canvas_bridge.providers.base import ImageProviderAdapter, decode_image


class ResponsesAdapter(ImageProviderAdapter):
    """Adapter for OpenAI-compatible ``/responses`` endpoints."""

    URL = ""
    no_image_hint = "No image returned by this model; try a different model id."

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}"}

    def build_payload(self, model: str, prompt: str, image_b64: str, mime_type: str) -> dict[str, Any]:
        return {
            "model": model,
            "input": [
                {
                    "role": "user",
                    "content": [
                        {"type": "input_text", "text": prompt},
                        {"type": "input_image", "image_url": f"data:{mime_type};base64,{image_b64}"},
                    ],
                }
            ],
        }

    @staticmethod
    def response_output(data: Mapping[str, Any]) -> Any:
        output = data.get("output")
        if output:
            return output
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], Mapping):
            return ""
        message = choices[0].get("message")
        if not isinstance(message, Mapping):
            return ""
        return message.get("content") or ""

    def generate(self, model: str, prompt: str, image_b64: str, mime_type: str = "image/png") -> tuple[bytes, str]:
        data = self._request("POST", self.URL, payload=self.build_payload(model, prompt, image_b64, mime_type))
        found = find_base64_image(self.response_output(data))
        if not found:
            raise NoImageInResponseError(self.no_image_hint)
        out_mime, b64 = found
        return decode_image(b64, self.label), out_mime
