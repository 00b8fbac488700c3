import base64
import importlib.util
import json
import os
import types
from unittest.mock import MagicMock

import requests

PLUGIN_DIR = os.path.abspath(
    os.path.join(os.path.dirname(__file__), "..", "..", "..", "tools", "canvas_imagegen")
)

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-canvas"
PNG_B64 = base64.b64encode(PNG_BYTES).decode()
OUT_BYTES = b"\x89PNG\r\n\x1a\ngenerated"
OUT_B64 = base64.b64encode(OUT_BYTES).decode()


def load_module_from_path(module_name: str, file_path: str) -> types.ModuleType:
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    assert spec and spec.loader, f"cannot load spec for {module_name} from {file_path}"
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)  # type: ignore
    return mod


def make_response(status_code: int = 200, body=None, headers: dict | None = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    if body is None:
        content = b""
    elif isinstance(body, (dict, list)):
        content = json.dumps(body).encode()
    else:
        content = str(body).encode()
    response._content = content
    response.encoding = "utf-8"
    response.headers.update(headers or {})
    return response


def make_session(*responses: requests.Response) -> MagicMock:
    session = MagicMock()
    session.request.side_effect = list(responses)
    return session
