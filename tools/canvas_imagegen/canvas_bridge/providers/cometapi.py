from canvas_bridge.providers.responses import ResponsesAdapter


class CometAPIAdapter(ResponsesAdapter):
    name = "cometapi"
    label = "CometAPI"
    URL = "https://api.cometapi.com/v1/responses"
    no_image_hint = "No image returned by this model; try another Comet model id."
    fallback_models = (
        "google/gemini-2.5-flash-image",
        "google/gemini-2.5-pro",
        "google/gemini-2.0-flash-001",
    )
