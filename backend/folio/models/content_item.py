from folio.extensions import db
from .base import BaseModel

CONTENT_TYPES = ("text", "image")

class ContentItem(BaseModel):
    __tablename__ = "content_items"

    section = db.Column(db.String(50), db.ForeignKey("sections.key"), nullable=False)
    content_type = db.Column(db.String(20), nullable=False)  # text, image
    content = db.Column(db.Text, nullable=False)  # HTML for text, JSON {src, alt} for image
    order_index = db.Column(db.Integer, nullable=False, default=0)

    # Relationship to parent Section
    owner = db.relationship("Section", back_populates="items")

    # No unique (section, order_index): swaps pass through duplicates mid-flush.
    # Density is checked by assert_section_order.
    __table_args__ = (
        db.Index("idx_content_section_order", "section", "order_index"),
        {"sqlite_autoincrement": True},
    )
