from portfolio.extensions import db
from .base import BaseModel

class Skill(BaseModel):
    __tablename__ = "skills"

    name = db.Column(db.String(200), nullable=False)
    display_order = db.Column(db.Integer, nullable=False, default=0)
