from portfolio.extensions import db
from .base import BaseModel

class Profile(BaseModel):
    __tablename__ = "profile"

    name = db.Column(db.String(200), nullable=False, default="")
    subtitle = db.Column(db.String(200), nullable=False, default="")
    role_title = db.Column(db.String(200), nullable=False, default="")
    headline = db.Column(db.String(300), nullable=False, default="")
    headline_accent = db.Column(db.String(300), nullable=False, default="")
    description = db.Column(db.Text, nullable=False, default="")
    job_title = db.Column(db.String(200), nullable=False, default="")
    location = db.Column(db.String(200), nullable=False, default="")
    experience = db.Column(db.String(200), nullable=False, default="")
    specialization = db.Column(db.String(200), nullable=False, default="")
    email = db.Column(db.String(200), nullable=False, default="")
    linkedin_url = db.Column(db.String(500), nullable=False, default="")
    twitter_url = db.Column(db.String(500), nullable=False, default="")
    github_url = db.Column(db.String(500), nullable=False, default="")
    methodology_quote = db.Column(db.Text, nullable=False, default="")
    methodology_description = db.Column(db.Text, nullable=False, default="")
    cta_headline = db.Column(db.String(300), nullable=False, default="")
    cta_accent = db.Column(db.String(300), nullable=False, default="")
    avatar_url = db.Column(db.String(1024), nullable=False, default="")
    hero_image_url = db.Column(db.String(1024), nullable=False, default="")
