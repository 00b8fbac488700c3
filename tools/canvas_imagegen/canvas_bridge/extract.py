"""Locate a base64 image inside loosely shaped provider responses."""

from __future__ import annotations

import re
from typing import Any

DATA_URL_PATTERN = re.compile(r"data:(image/[A-Za-z0-9.+-]+);base64,([A-Za-z0-9+/=]+)")


def find_data_url(text: Any) -> tuple[str, str] | None:
    """Return ``(mime_type, base64_payload)`` for the first image data URL in ``text``."""
    if not isinstance(text, str):
        return None
    match = DATA_URL_PATTERN.search(text)
    if not match:
        return None
    return match.group(1), match.group(2)


def find_base64_image(output: Any) -> tuple[str, str] | None:
    """
    Scan a Responses-style ``output`` for an image data URL.

    Strings are searched directly. For lists, each object item is checked in
    its ``image_url`` (plain string or ``{"url": ...}``), ``url`` and ``text``
    fields, then recursively in its ``content`` list.
    """
    if not output:
        return None
    if isinstance(output, str):
        return find_data_url(output)
    if not isinstance(output, list):
        return None

    for item in output:
        if not isinstance(item, dict):
            continue
        image_url = item.get("image_url")
        if isinstance(image_url, dict):
            image_url = image_url.get("url")
        for candidate in (image_url, item.get("url"), item.get("text")):
            found = find_data_url(candidate)
            if found:
                return found
        nested = item.get("content")
        if isinstance(nested, (list, str)):
            found = find_base64_image(nested)
            if found:
                return found
    return None
