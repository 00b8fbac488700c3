from canvas_bridge.providers.responses import ResponsesAdapter


class OpenRouterAdapter(ResponsesAdapter):
    name = "openrouter"
    label = "OpenRouter"
    URL = "https://openrouter.ai/api/v1/responses"
    no_image_hint = "No image returned by this model; try a different OpenRouter model id."
    # OpenRouter exposes its catalog on the site, so the list is curated
    fallback_models = (
        "google/gemini-2.5-pro",
        "google/gemini-2.0-flash-001",
    )
