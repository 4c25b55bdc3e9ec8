from folio.extensions import db
from folio.models.content_item import ContentItem
from folio.utils.audit import log_action
from folio.utils.order import compact_order
from folio.utils.transaction import transactional
from .reconcile_section import lock_section, section_items


def delete_content_item(
    *,
    item_id: int,
    actor_id: int | None = None,
) -> str:
    """
    Delete a single content item and re-compact its section.

    Returns the section key the item belonged to.
    """
    item = db.session.get(ContentItem, item_id)

    if not item:
        raise LookupError("Content not found")

    section_key = item.section

    with transactional(f"delete of content item {item_id}"):
        lock_section(section_key)

        db.session.delete(item)
        db.session.flush()

        compact_order(section_items(section_key))

        log_action(
            action="content.delete",
            entity_type="content_item",
            entity_id=item_id,
            actor_id=actor_id,
            payload={"section": section_key},
        )

    return section_key
