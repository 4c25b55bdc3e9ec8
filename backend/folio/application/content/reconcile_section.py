# folio/application/content/reconcile_section.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from flask import current_app
from sqlalchemy import select
from folio.extensions import db
from folio.models.content_item import ContentItem
from folio.models.section import Section
from folio.content.validation import IncomingItem, validate_items, validate_section_key
from folio.domain.invariants.content import assert_section_content
from folio.domain.invariants.exceptions import SectionNotFound
from folio.utils.audit import log_action
from folio.utils.transaction import transactional


@dataclass
class ReconcileResult:
    section: str
    items: List[ContentItem]
    created: List[int] = field(default_factory=list)
    updated: List[int] = field(default_factory=list)
    deleted: List[int] = field(default_factory=list)
    skipped_empty: List[int] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.created or self.updated or self.deleted)

    def changes(self) -> Dict[str, List[int]]:
        return {
            "created": self.created,
            "updated": self.updated,
            "deleted": self.deleted,
            "skipped_empty": self.skipped_empty,
        }


def lock_section(section_key: str) -> Section:
    section = (
        db.session.execute(
            select(Section)
            .where(Section.key == section_key)
            .with_for_update()
        )
        .scalar_one_or_none()
    )

    if not section:
        raise SectionNotFound(f"Section {section_key!r} has not been provisioned")
    return section


def section_items(section_key: str) -> List[ContentItem]:
    return (
        ContentItem.query
        .filter_by(section=section_key)
        .order_by(ContentItem.order_index.asc(), ContentItem.id.asc())
        .all()
    )


def _apply_update(row: ContentItem, incoming: IncomingItem, order_index: int) -> List[str]:
    changed_fields = []
    values = {
        "content_type": incoming.content_type,
        "content": incoming.payload.to_wire(),
        "order_index": order_index,
    }

    for name, value in values.items():
        if getattr(row, name) != value:
            setattr(row, name, value)
            changed_fields.append(name)

    return changed_fields


def reconcile_section(
    *,
    section_key: str,
    raw_items: Any,
    actor_id: Optional[int] = None,
) -> ReconcileResult:
    """
    Make the persisted content of a section match an ordered list.

    Responsibilities:
    - Reject unknown sections and malformed items before touching storage
    - Silently drop items whose content is empty
    - Update items whose id is persisted in this section, insert the rest,
      delete persisted items nobody referenced
    - Apply everything in one transaction under a section row lock
    - Audit logging
    """
    config = current_app.config

    # 1️⃣ Structural validation, no side effects
    validate_section_key(section_key, config["CONTENT_SECTIONS"])
    incoming = validate_items(raw_items, max_length=config["MAX_CONTENT_LENGTH_CHARS"])

    surviving = [item for item in incoming if not item.payload.is_empty()]
    result = ReconcileResult(
        section=section_key,
        items=[],
        skipped_empty=[item.position for item in incoming if item.payload.is_empty()],
    )

    # Ties on order_index keep submission order (sorted is stable)
    ordered = sorted(surviving, key=lambda item: item.order_index)

    with transactional(f"reconcile of {section_key}"):
        # 2️⃣ Serialize reconcilers of the same section
        lock_section(section_key)

        persisted = section_items(section_key)
        by_id = {row.id: row for row in persisted}

        # 3️⃣ Partition
        kept_ids = {item.id for item in ordered if item.id in by_id}
        doomed = [row for row in persisted if row.id not in kept_ids]

        for row in doomed:
            result.deleted.append(row.id)
            db.session.delete(row)
        db.session.flush()

        new_rows = []
        for order_index, item in enumerate(ordered):
            row = by_id.get(item.id) if item.id is not None else None

            if row is None:
                row = ContentItem()
                row.section = section_key
                row.content_type = item.content_type
                row.content = item.payload.to_wire()
                row.order_index = order_index

                db.session.add(row)
                new_rows.append(row)
            elif _apply_update(row, item, order_index):
                result.updated.append(row.id)

        db.session.flush()  # assigns ids to new rows
        result.created = [row.id for row in new_rows]

        # 4️⃣ Domain invariants on what is about to become durable
        assert_section_content(section_key, section_items(section_key))

        log_action(
            action="content.reconcile",
            entity_type="section",
            entity_id=section_key,
            actor_id=actor_id,
            payload=result.changes(),
        )

    current_app.logger.info(
        "Reconciled section %s: existing=%s incoming=%s created=%s updated=%s deleted=%s skipped_empty=%s",
        section_key,
        sorted(by_id),
        [item.id for item in incoming],
        result.created,
        result.updated,
        result.deleted,
        result.skipped_empty,
    )

    # 5️⃣ Canonical, durable state
    result.items = section_items(section_key)
    return result
