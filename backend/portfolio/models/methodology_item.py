from portfolio.extensions import db
from .base import BaseModel

class MethodologyItem(BaseModel):
    __tablename__ = "methodology_items"

    number = db.Column(db.String(20), nullable=False, default="")
    title = db.Column(db.String(300), nullable=False, default="")
    items = db.Column(db.JSON, nullable=False, default=list)  # ordered bullet points
    display_order = db.Column(db.Integer, nullable=False, default=0)
