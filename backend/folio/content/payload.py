"""
Tagged content payloads.

A content item's ``content`` column is a string whose meaning depends on
``content_type``:

- ``text``: an HTML fragment, stored verbatim
- ``image``: a JSON object ``{"src": ..., "alt": ...}``

Older rows store an image as a bare path (``/media/x.jpg``) and some were
saved HTML-entity-escaped. ``parse_content`` is the single place where those
legacy shapes are recognised; everything past it works with
``TextContent`` / ``ImageContent``.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from html import unescape
from typing import Any, ClassVar, Union

from .emptiness import is_image_empty, is_text_empty


class PayloadError(ValueError):
    """Raised when a payload cannot be interpreted for its content type."""


@dataclass(frozen=True)
class TextContent:
    content_type: ClassVar[str] = "text"

    html: str

    def is_empty(self) -> bool:
        return is_text_empty(self.html)

    def to_wire(self) -> str:
        return self.html


@dataclass(frozen=True)
class ImageContent:
    content_type: ClassVar[str] = "image"

    src: str | None
    alt: str = ""

    def is_empty(self) -> bool:
        return is_image_empty(self.src)

    def to_wire(self) -> str:
        return json.dumps({"src": self.src, "alt": self.alt}, ensure_ascii=False)


Content = Union[TextContent, ImageContent]


def _parse_image(raw: Any) -> ImageContent:
    if isinstance(raw, dict):
        data = raw
    elif isinstance(raw, str):
        text = raw.strip()
        if "&quot;" in text or "&#x2F;" in text:
            text = unescape(text)

        if not text.startswith("{"):
            # Legacy bare path
            return ImageContent(src=text or None, alt="")

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise PayloadError("Image content is not valid JSON") from exc

        if not isinstance(data, dict):
            raise PayloadError("Image content must be a JSON object")
    else:
        raise PayloadError("Image content must be a string")

    src = data.get("src")
    alt = data.get("alt") or ""
    if src is not None and not isinstance(src, str):
        raise PayloadError("Image src must be a string")
    if not isinstance(alt, str):
        raise PayloadError("Image alt must be a string")

    return ImageContent(src=src, alt=alt)


def parse_content(content_type: str, raw: Any) -> Content:
    if content_type == "text":
        if not isinstance(raw, str):
            raise PayloadError("Text content must be a string")
        return TextContent(html=raw)

    if content_type == "image":
        return _parse_image(raw)

    raise PayloadError(f"Unknown content type: {content_type!r}")
