from portfolio.extensions import db
from .base import BaseModel

class PortfolioSection(BaseModel):
    __tablename__ = "portfolio_sections"

    section_type = db.Column(db.String(50), nullable=False)  # text_block, full_image, image_gallery, ...
    title = db.Column(db.String(500), nullable=True)
    content = db.Column(db.Text, nullable=True)
    image_url = db.Column(db.String(1024), nullable=True)
    images = db.Column(db.JSON, nullable=False, default=list)
    display_order = db.Column(db.Integer, nullable=False, default=0)
    parent = db.Column(db.String(200), nullable=False, default="home", index=True)  # "home" or a project slug
    settings = db.Column(db.JSON, nullable=False, default=dict)

    __table_args__ = (
        db.Index("idx_section_parent_order", "parent", "display_order"),
    )
