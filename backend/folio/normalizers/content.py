from flask import current_app
from folio.content.payload import PayloadError, parse_content


def normalize_payload(item):
    """
    Canonical wire string for an item's content. Legacy image rows
    (bare paths, entity-escaped JSON) come out as ``{"src", "alt"}`` JSON.
    """
    if item.content_type != "image":
        return item.content

    try:
        return parse_content("image", item.content).to_wire()
    except PayloadError:
        current_app.logger.warning(
            "Content item %s holds an unreadable image payload", item.id
        )
        return item.content


def normalize_content_item(item, admin=False):
    base = {
        "id": item.id,
        "section": item.section,
        "content_type": item.content_type,
        "content": normalize_payload(item),
        "order_index": item.order_index,
    }

    if admin:
        base["created_at"] = item.created_at.isoformat() if item.created_at else None
        base["updated_at"] = item.updated_at.isoformat() if item.updated_at else None

    return base


def normalize_section_content(section_key, items, admin=False):
    items = sorted(items, key=lambda i: (i.order_index, i.id))

    return {
        "section": section_key,
        "content": [normalize_content_item(i, admin=admin) for i in items],
    }
