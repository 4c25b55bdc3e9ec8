from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from folio.content.payload import (
    Content,
    ImageContent,
    PayloadError,
    TextContent,
    parse_content,
)

log = logging.getLogger(__name__)


class BlockKind(str, Enum):
    TEXT = "text"
    IMAGE = "image"


@dataclass(eq=False)
class Block:
    """Editing-side mirror of one content item.

    Blocks compare by identity: two blocks holding the same text are still
    two different blocks in the list.
    """

    kind: BlockKind
    item_id: int | None = None
    html: str = ""
    src: str | None = None
    alt: str = ""
    upload_pending: bool = False
    deleting: bool = False
    key: str = field(default_factory=lambda: uuid.uuid4().hex)

    @classmethod
    def text(cls, html: str = "", item_id: int | None = None) -> Block:
        return cls(kind=BlockKind.TEXT, html=html, item_id=item_id)

    @classmethod
    def image(cls, src: str | None = None, alt: str = "", item_id: int | None = None) -> Block:
        return cls(kind=BlockKind.IMAGE, src=src, alt=alt, item_id=item_id)

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> Block:
        kind = BlockKind(item["content_type"])
        item_id = item.get("id")
        raw = item.get("content", "")

        if kind is BlockKind.TEXT:
            return cls.text(raw, item_id=item_id)

        try:
            image = parse_content("image", raw)
        except PayloadError:
            log.warning("Unreadable image payload on item %s, keeping it as a path", item_id)
            image = ImageContent(src=raw, alt="")
        return cls.image(image.src, image.alt, item_id=item_id)

    @property
    def is_persisted(self) -> bool:
        return self.item_id is not None

    def payload(self) -> Content:
        if self.kind is BlockKind.TEXT:
            return TextContent(html=self.html)
        return ImageContent(src=self.src, alt=self.alt)

    def is_empty(self) -> bool:
        return self.payload().is_empty()

    def to_item(self, order_index: int) -> dict[str, Any]:
        item: dict[str, Any] = {
            "content_type": self.kind.value,
            "content": self.payload().to_wire(),
            "order_index": order_index,
        }
        if self.item_id is not None:
            item["id"] = self.item_id
        return item
