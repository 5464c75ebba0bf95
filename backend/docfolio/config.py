import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()

class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(
        seconds=int(os.getenv("JWT_ACCESS_TOKEN_EXPIRES", 60 * 60 * 12))
    )

    # Blob storage
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads")
    MEDIA_URL_PREFIX = os.getenv("MEDIA_URL_PREFIX", "/media")
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", 10 * 1024 * 1024))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    DEFAULT_LANGUAGE = os.getenv("DEFAULT_LANGUAGE", "english")

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///docfolio-dev.db")

class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")

class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "testing-secret-key-with-enough-length"
    JWT_SECRET_KEY = "testing-jwt-secret-key-with-enough-length"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    LOG_LEVEL = "DEBUG"

config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
