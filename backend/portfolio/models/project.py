from portfolio.extensions import db
from .base import BaseModel

class Project(BaseModel):
    __tablename__ = "projects"

    slug = db.Column(db.String(200), nullable=False, unique=True, index=True)
    category = db.Column(db.String(200), nullable=False, default="")
    number = db.Column(db.String(20), nullable=False, default="")
    title = db.Column(db.String(300), nullable=False, default="")
    description = db.Column(db.Text, nullable=False, default="")
    long_description = db.Column(db.Text, nullable=False, default="")
    stat_label_1 = db.Column(db.String(100), nullable=False, default="")
    stat_value_1 = db.Column(db.String(100), nullable=False, default="")
    stat_label_2 = db.Column(db.String(100), nullable=False, default="")
    stat_value_2 = db.Column(db.String(100), nullable=False, default="")
    bg_color = db.Column(db.String(50), nullable=False, default="")
    display_order = db.Column(db.Integer, nullable=False, default=0)
    thumbnail_url = db.Column(db.String(1024), nullable=False, default="")
    images = db.Column(db.JSON, nullable=False, default=list)
