from folio.extensions import db
from .base import BaseModel

class Section(BaseModel):
    __tablename__ = "sections"

    key = db.Column(db.String(50), unique=True, nullable=False, index=True)  # interesanti, gramatas, fragmenti
    title = db.Column(db.String(200), nullable=False)

    # Relationship to content items (ordered, cascade deletes)
    items = db.relationship(
        "ContentItem",
        back_populates="owner",
        order_by="ContentItem.order_index",
        cascade="all, delete-orphan"
    )
