from docfolio.extensions import db
from .base import BaseModel

class Page(BaseModel):
    __tablename__ = "pages"

    title = db.Column(db.String(200), nullable=False)
    title_native = db.Column(db.String(200), nullable=True)

    # Serialized rich-text documents
    description = db.Column(db.Text, nullable=True)
    description_native = db.Column(db.Text, nullable=True)

    slug = db.Column(db.String(200), nullable=False, unique=True, index=True)
    parent_id = db.Column(
        db.String(36),
        db.ForeignKey("pages.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    order = db.Column(db.Integer, nullable=False, default=0)
    only_for_admin = db.Column(db.Boolean, nullable=False, default=False, index=True)

    parent = db.relationship("Page", back_populates="children", remote_side="Page.id")
    children = db.relationship(
        "Page",
        back_populates="parent",
        order_by="Page.order",
        cascade="all, delete-orphan",
    )

    # Relationship to Sections (ordered, cascade deletes)
    sections = db.relationship(
        "Section",
        back_populates="page",
        order_by="Section.order",
        cascade="all, delete-orphan",
    )
