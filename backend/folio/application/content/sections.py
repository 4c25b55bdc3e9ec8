from typing import Any, Dict, List
from flask import current_app
from sqlalchemy import func
from folio.extensions import db
from folio.models.content_item import ContentItem
from folio.models.section import Section
from folio.utils.transaction import transactional


def sync_sections() -> List[str]:
    """
    Provision a row for every configured section key.
    Existing rows only get their title refreshed. Returns the keys created.
    """
    config = current_app.config
    titles = config.get("SECTION_TITLES", {})
    existing = {s.key: s for s in Section.query.all()}
    created = []

    with transactional("section provisioning"):
        for key in config["CONTENT_SECTIONS"]:
            title = titles.get(key, key.title())
            section = existing.get(key)

            if section is None:
                section = Section()
                section.key = key
                section.title = title
                db.session.add(section)
                created.append(key)
            elif section.title != title:
                section.title = title

    return created


def describe_sections() -> List[Dict[str, Any]]:
    counts = dict(
        db.session.query(ContentItem.section, func.count(ContentItem.id))
        .group_by(ContentItem.section)
        .all()
    )
    provisioned = {s.key: s for s in Section.query.all()}
    titles = current_app.config.get("SECTION_TITLES", {})

    return [
        {
            "key": key,
            "title": provisioned[key].title if key in provisioned else titles.get(key, key),
            "provisioned": key in provisioned,
            "count": counts.get(key, 0),
        }
        for key in current_app.config["CONTENT_SECTIONS"]
    ]
