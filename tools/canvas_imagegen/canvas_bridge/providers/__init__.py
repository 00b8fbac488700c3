from typing import Any

from canvas_bridge.errors import UnknownProviderError
from canvas_bridge.providers.base import ImageProviderAdapter
from canvas_bridge.providers.cometapi import CometAPIAdapter
from canvas_bridge.providers.google import GoogleAdapter
from canvas_bridge.providers.openrouter import OpenRouterAdapter

ADAPTERS: dict[str, type[ImageProviderAdapter]] = {
    GoogleAdapter.name: GoogleAdapter,
    OpenRouterAdapter.name: OpenRouterAdapter,
    CometAPIAdapter.name: CometAPIAdapter,
}


def get_adapter_class(provider: str) -> type[ImageProviderAdapter]:
    try:
        return ADAPTERS[provider]
    except KeyError:
        raise UnknownProviderError(
            f"Unknown provider: {provider}. Must be one of: {', '.join(ADAPTERS)}"
        ) from None


def get_adapter(provider: str, api_key: str, **kwargs: Any) -> ImageProviderAdapter:
    return get_adapter_class(provider)(api_key, **kwargs)


__all__ = [
    "ADAPTERS",
    "CometAPIAdapter",
    "GoogleAdapter",
    "ImageProviderAdapter",
    "OpenRouterAdapter",
    "get_adapter",
    "get_adapter_class",
]
