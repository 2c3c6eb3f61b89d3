# travelflow/core/config.py
import os
from pydantic_settings import BaseSettings
from pydantic import validator
from typing import List, Optional


DEV_SECRET_KEY = "dev-secret-change-me"


class Settings(BaseSettings):
    """Application settings loaded from .env"""

    # === Database ===
    DATABASE_URL: str = "sqlite+aiosqlite:///./travelflow.db"
    DATABASE_TEST_URL: Optional[str] = None
    DB_ECHO: bool = False

    @validator("DATABASE_URL")
    def validate_database_url(cls, v):
        """Ensure database URL is safe for current environment"""
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env == "production" and ("localhost" in v or v.startswith("sqlite")):
            raise ValueError("Production environment cannot use a local database")
        return v

    # === JWT ===
    SECRET_KEY: str = DEV_SECRET_KEY
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    @validator("SECRET_KEY")
    def validate_secret_key(cls, v):
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env == "production" and v == DEV_SECRET_KEY:
            raise ValueError("SECRET_KEY must be set in production")
        return v

    # === CORS ===
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    ALLOWED_METHODS: List[str] = ["*"]
    ALLOWED_HEADERS: List[str] = ["*"]

    # === File Upload ===
    UPLOAD_PATH: str = "uploads"
    MAX_FILE_SIZE: int = 10 * 1024 * 1024
    ALLOWED_EXTENSIONS: List[str] = [".pdf", ".jpg", ".jpeg", ".png", ".webp", ".gif", ".doc", ".docx", ".xls", ".xlsx"]

    # === System ===
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # === Security ===
    BCRYPT_ROUNDS: int = 12

    # === Seed data ===
    SEED_DEFAULT_USERS: bool = True
    DEFAULT_USER_PASSWORD: str = "password123"

    # === Business Rules ===
    ENFORCE_EXPENSE_SUBMISSION_GATE: bool = True
    BUDGET_UPDATE_MAX_RETRIES: int = 3
    NOTIFICATION_PREVIEW_LENGTH: int = 50
    STATS_MONTHS: int = 6

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Create a global settings instance
settings = Settings()
