from docfolio.extensions import db
from .base import BaseModel

class Section(BaseModel):
    __tablename__ = "sections"

    page_id = db.Column(
        db.String(36),
        db.ForeignKey("pages.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title = db.Column(db.String(200), nullable=False)
    title_native = db.Column(db.String(200), nullable=True)
    description = db.Column(db.Text, nullable=True)
    description_native = db.Column(db.Text, nullable=True)

    slug = db.Column(db.String(200), nullable=False)
    order = db.Column(db.Integer, nullable=False, default=0)

    content = db.Column(db.Text, nullable=True)
    content_native = db.Column(db.Text, nullable=True)

    image_url = db.Column(db.String(512), nullable=True)
    show_in_main_page = db.Column(db.Boolean, nullable=False, default=False, index=True)

    page = db.relationship("Page", back_populates="sections")

    __table_args__ = (
        db.UniqueConstraint("page_id", "slug", name="uq_section_slug_per_page"),
        db.Index("idx_section_page_order", "page_id", "order"),
    )
