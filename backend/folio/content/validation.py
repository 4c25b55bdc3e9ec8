from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from folio.domain.invariants.exceptions import ContentValidationError
from folio.models.content_item import CONTENT_TYPES
from .payload import Content, PayloadError, parse_content


@dataclass
class IncomingItem:
    position: int  # index in the submitted array
    id: Optional[int]
    content_type: str
    payload: Content
    order_index: int


def validate_section_key(section_key: str, allowed) -> str:
    if section_key not in allowed:
        raise ContentValidationError(
            f"Invalid section. Must be one of: {', '.join(allowed)}",
            details=[{"field": "section", "message": "Unknown section", "value": section_key}],
        )
    return section_key


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _coerce_id(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    if _is_int(value):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    raise ValueError("id must be a positive integer")


def validate_items(raw: Any, *, max_length: int) -> List[IncomingItem]:
    """
    Check the shape of a replace-all payload.

    All problems are collected and reported together; nothing is persisted
    when any item is malformed. Empty content is *not* a shape problem and
    passes through here untouched; the length limit only applies to items
    that will be stored.
    """
    if not isinstance(raw, list):
        raise ContentValidationError(
            "Content must be an array",
            details=[{"field": "content", "message": "Content must be an array"}],
        )

    details: List[Dict[str, Any]] = []
    items: List[IncomingItem] = []
    seen_ids: set[int] = set()

    for position, entry in enumerate(raw):
        field = f"content[{position}]"

        if not isinstance(entry, dict):
            details.append({"field": field, "message": "Item must be an object"})
            continue

        errors_before = len(details)

        content_type = entry.get("content_type")
        if content_type not in CONTENT_TYPES:
            details.append({
                "field": f"{field}.content_type",
                "message": "Content type must be text or image",
                "value": content_type,
            })

        content = entry.get("content")
        if not isinstance(content, str):
            details.append({"field": f"{field}.content", "message": "Content must be a string"})

        order_index = entry.get("order_index", position)
        if not _is_int(order_index) or order_index < 0:
            details.append({
                "field": f"{field}.order_index",
                "message": "Order index must be a non-negative integer",
                "value": order_index,
            })

        try:
            item_id = _coerce_id(entry.get("id"))
        except ValueError as exc:
            details.append({"field": f"{field}.id", "message": str(exc), "value": entry.get("id")})
            item_id = None
        else:
            if item_id is not None and item_id <= 0:
                details.append({"field": f"{field}.id", "message": "id must be a positive integer"})
            elif item_id is not None and item_id in seen_ids:
                details.append({"field": f"{field}.id", "message": f"Duplicate id {item_id}"})
            elif item_id is not None:
                seen_ids.add(item_id)

        if len(details) > errors_before:
            continue

        try:
            payload = parse_content(content_type, content)
        except PayloadError as exc:
            details.append({"field": f"{field}.content", "message": str(exc)})
            continue

        # Empty items are dropped later whatever their size
        if not payload.is_empty() and len(content) > max_length:
            details.append({
                "field": f"{field}.content",
                "message": f"Content must not exceed {max_length} characters",
            })
            continue

        items.append(IncomingItem(
            position=position,
            id=item_id,
            content_type=content_type,
            payload=payload,
            order_index=order_index,
        ))

    if details:
        raise ContentValidationError("Validation failed", details=details)

    return items
