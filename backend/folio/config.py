import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()

class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.getenv("JWT_ACCESS_HOURS", "8")))
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Sections are fixed by configuration, never created by the editor
    CONTENT_SECTIONS = ("interesanti", "gramatas", "fragmenti")
    SECTION_TITLES = {
        "interesanti": "Interesanti",
        "gramatas": "Grāmatas",
        "fragmenti": "Fragmenti",
    }

    MAX_CONTENT_LENGTH_CHARS = 10000
    MAX_CONTENT_LENGTH = 5 * 1024 * 1024  # upload body limit
    UPLOAD_FOLDER = os.getenv("UPLOAD_DIR", "uploads")
    ALLOWED_IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "gif", "webp"}

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///folio-dev.sqlite3")

class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET_KEY = "test-jwt-secret-with-enough-length-for-hs256"

class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")

config_by_name = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig
}
