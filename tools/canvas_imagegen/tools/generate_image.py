import logging
from collections.abc import Generator
from typing import Any

import requests
from dify_plugin import Tool
from dify_plugin.entities.tool import ToolInvokeMessage

from canvas_bridge.batch import DEFAULT_PACING_SECONDS, DEFAULT_PROMPT, clamp_count, run_batch
from canvas_bridge.errors import CanvasBridgeError
from canvas_bridge.providers import get_adapter, get_adapter_class
from canvas_bridge.session import CanvasSession

logger = logging.getLogger(__name__)

FILE_EXTENSIONS = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/webp": "webp",
}


class GenerateImageTool(Tool):
    """
    Send the exported canvas and a prompt to the chosen provider, then post
    every returned image back to the host as a blob.
    """

    def _invoke(self, tool_parameters: dict[str, Any]) -> Generator[ToolInvokeMessage, None, None]:
        provider = (tool_parameters.get("provider") or "google").strip()
        try:
            adapter_cls = get_adapter_class(provider)
        except CanvasBridgeError as e:
            yield self.create_text_message(str(e))
            return

        api_key = (self.runtime.credentials.get(f"{provider}_api_key") or "").strip()
        if not api_key:
            yield self.create_text_message(f"Enter API key for {adapter_cls.label}")
            return

        session = CanvasSession()
        image = tool_parameters.get("image")
        if image is not None:
            status = session.receive(image.blob)
            if status:
                logger.info(status)
        if not session.latest_png:
            yield self.create_text_message("Export the canvas first")
            return
        mime_type = getattr(image, "mime_type", None) or "image/png"

        model = (tool_parameters.get("custom_model") or "").strip() or (tool_parameters.get("model") or "").strip()
        if not model:
            # model ids are provider specific, so the default follows the provider
            model = adapter_cls.fallback_models[0]

        prompt = (tool_parameters.get("prompt") or "").strip() or DEFAULT_PROMPT
        count = clamp_count(tool_parameters.get("count", 1))
        pacing = self._pacing_seconds(tool_parameters.get("pacing_ms"))

        yield self.create_text_message(f"Calling {model} via {provider} for {count} image(s)...")

        adapter = get_adapter(provider, api_key)
        generated = 0
        retries = 0
        error = None
        try:
            for result in run_batch(
                adapter,
                model,
                prompt,
                session.canvas_base64(),
                count,
                mime_type=mime_type,
                pacing=pacing,
            ):
                generated += 1
                retries += result.retries
                extension = FILE_EXTENSIONS.get(result.mime_type, "png")
                yield self.create_blob_message(
                    blob=result.data,
                    meta={"mime_type": result.mime_type, "filename": f"canvas_{result.index}.{extension}"},
                )
                yield self.create_text_message(f"Inserted image {result.index}/{result.total}")
        except (CanvasBridgeError, requests.RequestException) as e:
            logger.error("generation via %s failed: %s", provider, e)
            error = str(e)
        finally:
            adapter.close()

        summary = {
            "provider": provider,
            "model": model,
            "prompt": prompt,
            "requested": count,
            "generated": generated,
            "retries": retries,
        }
        if error:
            summary["error"] = error
            yield self.create_text_message(error)
        else:
            yield self.create_text_message(f"Done: {count} image(s) processed")
        yield self.create_json_message(summary)

    @staticmethod
    def _pacing_seconds(value: Any) -> float:
        if value is None or value == "":
            return DEFAULT_PACING_SECONDS
        try:
            return max(0.0, float(value) / 1000)
        except (TypeError, ValueError):
            return DEFAULT_PACING_SECONDS
