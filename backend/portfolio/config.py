import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()

class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.getenv("JWT_ACCESS_HOURS", "12")))
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # The admin API reads bearer headers; the admin pages read the cookie
    JWT_TOKEN_LOCATION = ["headers", "cookies"]
    JWT_COOKIE_SECURE = os.getenv("JWT_COOKIE_SECURE", "false").lower() == "true"
    JWT_CSRF_CHECK_FORM = True

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Object storage (uploaded images)
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads")
    STORAGE_BUCKET = os.getenv("STORAGE_BUCKET", "portfolio-assets")
    MEDIA_URL_PREFIX = os.getenv("MEDIA_URL_PREFIX", "/media")
    MAX_IMAGE_BYTES = 5 * 1024 * 1024
    MAX_GALLERY_IMAGES = 12
    MAX_PROJECT_IMAGES = 8

    # Inline status messages auto-dismiss after this many seconds
    STATUS_MESSAGE_TTL = 3.0

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///portfolio-dev.db")

class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")

class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "test-secret"
    JWT_SECRET_KEY = "test-jwt-secret-with-enough-length-for-hs256"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    LOG_LEVEL = "DEBUG"

config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
