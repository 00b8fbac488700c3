"""Host side of the bridge: holds the most recent canvas export."""

from __future__ import annotations

import base64
import logging
from typing import Any

from canvas_bridge.errors import CanvasNotExportedError

logger = logging.getLogger(__name__)

# acknowledgement the host sends after running a script
HOST_DONE = "done"


class CanvasSession:
    def __init__(self) -> None:
        self.latest_png: bytes | None = None

    def receive(self, message: Any) -> str | None:
        """
        Handle one message from the host.

        Binary payloads are canvas exports and replace the previous one; the
        returned status text is meant for the user. Strings are host chatter.
        """
        if message is None or message == HOST_DONE:
            return None
        if isinstance(message, (bytes, bytearray, memoryview)):
            self.latest_png = bytes(message)
            return "Got canvas PNG from host"
        if isinstance(message, str):
            logger.debug("host says: %s", message)
            return None
        logger.debug("ignoring host message of type %s", type(message).__name__)
        return None

    def require_canvas(self) -> bytes:
        if not self.latest_png:
            raise CanvasNotExportedError("Export the canvas first")
        return self.latest_png

    def canvas_base64(self) -> str:
        return base64.b64encode(self.require_canvas()).decode("ascii")
