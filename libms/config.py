import os
from datetime import timedelta


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me-libms-secret-key-0000000")

    SQLALCHEMY_DATABASE_URI = os.getenv("SQLALCHEMY_DATABASE_URI", "sqlite:///libms.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    # create missing tables on startup when migrations are not used
    AUTO_CREATE_TABLES = _env_bool("AUTO_CREATE_TABLES", "1")

    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me-libms-jwt-secret-key-000")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=int(os.getenv("JWT_ACCESS_MINUTES", "60")))
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=int(os.getenv("JWT_REFRESH_DAYS", "7")))

    # Borrowing rules
    BORROW_MONTHLY_LIMIT = int(os.getenv("BORROW_MONTHLY_LIMIT", "3"))
    BORROW_MAX_BOOKS = int(os.getenv("BORROW_MAX_BOOKS", "5"))

    DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "5"))
    MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "100"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    SEED_ADMIN_USERNAME = os.getenv("SEED_ADMIN_USERNAME", "admin")
    SEED_ADMIN_EMAIL = os.getenv("SEED_ADMIN_EMAIL", "admin@library.local")
    SEED_ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "Admin@123")
