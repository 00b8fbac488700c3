from collections.abc import Generator
from typing import Any

from dify_plugin import Tool
from dify_plugin.entities.tool import ToolInvokeMessage

from canvas_bridge.errors import CanvasBridgeError
from canvas_bridge.providers import get_adapter, get_adapter_class


class ListModelsTool(Tool):
    def _invoke(self, tool_parameters: dict[str, Any]) -> Generator[ToolInvokeMessage, None, None]:
        provider = (tool_parameters.get("provider") or "google").strip()
        try:
            adapter_cls = get_adapter_class(provider)
        except CanvasBridgeError as e:
            yield self.create_text_message(str(e))
            return

        api_key = (self.runtime.credentials.get(f"{provider}_api_key") or "").strip()
        if not api_key:
            yield self.create_text_message("Enter API key first")
            return

        adapter = get_adapter(provider, api_key)
        try:
            models = adapter.list_models()
        finally:
            adapter.close()
        yield self.create_text_message("\n".join(models))
        yield self.create_json_message({"provider": provider, "label": adapter_cls.label, "models": models})
