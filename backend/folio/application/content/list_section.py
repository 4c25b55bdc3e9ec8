from typing import List, Optional
from flask import current_app
from folio.models.content_item import CONTENT_TYPES, ContentItem
from folio.content.validation import validate_section_key
from folio.domain.invariants.exceptions import ContentValidationError


def list_section(
    *,
    section_key: str,
    content_type: Optional[str] = None,
) -> List[ContentItem]:
    """
    Canonical read of a section, ordered by order_index.
    An empty list is a valid, empty section.
    """
    validate_section_key(section_key, current_app.config["CONTENT_SECTIONS"])

    query = ContentItem.query.filter_by(section=section_key)

    if content_type is not None:
        if content_type not in CONTENT_TYPES:
            raise ContentValidationError(
                "Invalid type. Must be one of: text, image",
                details=[{"field": "type", "message": "Unknown content type", "value": content_type}],
            )
        query = query.filter_by(content_type=content_type)

    return query.order_by(ContentItem.order_index.asc(), ContentItem.id.asc()).all()
