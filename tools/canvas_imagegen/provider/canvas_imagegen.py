from typing import Any

import requests
from dify_plugin import ToolProvider
from dify_plugin.errors.tool import ToolProviderCredentialValidationError

from canvas_bridge.errors import CanvasBridgeError, ProviderHTTPError
from canvas_bridge.providers import ADAPTERS, GoogleAdapter

GOOGLE_KEY = "google_api_key"
# statuses Gemini answers with for a missing, malformed or revoked key
REJECTED_KEY_STATUS = {400, 401, 403}


class CanvasImagegenProvider(ToolProvider):
    def _validate_credentials(self, credentials: dict[str, Any]) -> None:
        if not any(credentials.get(f"{name}_api_key") for name in ADAPTERS):
            raise ToolProviderCredentialValidationError(
                "At least one API key (Google, OpenRouter or CometAPI) is required."
            )

        google_key = credentials.get(GOOGLE_KEY)
        if not google_key:
            return
        adapter = GoogleAdapter(google_key, timeout=30)
        try:
            adapter.fetch_models()
        except ProviderHTTPError as e:
            if e.is_rate_limited:
                # the key was accepted, only the quota is exhausted
                return
            if e.status_code in REJECTED_KEY_STATUS:
                raise ToolProviderCredentialValidationError(f"Invalid Google API key: {e}") from e
            raise ToolProviderCredentialValidationError(
                f"Could not validate the Google API key: {e}"
            ) from e
        except CanvasBridgeError as e:
            raise ToolProviderCredentialValidationError(
                f"Could not validate the Google API key: {e}"
            ) from e
        except requests.RequestException as e:
            raise ToolProviderCredentialValidationError(
                f"Could not reach the Gemini API while validating the key: {e}"
            ) from e
        finally:
            adapter.close()
