"""Application configuration module.

This module contains settings for the URL shortener service,
loaded from environment variables with appropriate defaults.
"""

from __future__ import annotations

import logging
import string
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Letters, digits and the two URL-safe punctuation characters
URL_SAFE_ALPHABET = string.ascii_letters + string.digits + "-_"


class EnvironmentType(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """Application settings loaded from environment variables with defaults.

    Settings are loaded from environment variables, with fallback to
    values in .env file if present, and finally to the default values
    specified here.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment setting
    ENVIRONMENT: EnvironmentType = EnvironmentType.DEVELOPMENT

    # App Information
    APP_NAME: str = "Shortify"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Maps long URLs to short codes and redirects them back"

    # API Configuration
    BASE_URL: str = "http://localhost:8000"  # Used for building short URLs
    API_PREFIX: str = "/api/v1"
    DEBUG: bool = False

    # CORS settings
    CORS_ORIGINS: Union[List[str], str] = ["*"]
    CORS_METHODS: Union[List[str], str] = ["GET", "POST", "PUT"]

    # Short code generation
    SHORT_CODE_LENGTH: int = Field(default=6, ge=1)
    SHORT_CODE_ALPHABET: str = Field(default=URL_SAFE_ALPHABET, min_length=2)
    SHORT_CODE_MAX_ATTEMPTS: int = Field(default=5, ge=1)

    # Database settings
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./shortify.db",
        validation_alias=AliasChoices("ACCELERATE_URL", "DATABASE_URL"),
    )
    DB_CREATE_TABLES: bool = True
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 20
    DB_POOL_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 300

    # Logging configuration
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False
    LOG_FORMAT: str = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {name}:{line} | {message}"
    LOG_DIR: Optional[str] = None  # No file sink unless set
    LOG_FILENAME: str = "shortify.log"
    LOG_ROTATION: str = "10 MB"
    LOG_RETENTION: str = "7 days"
    REQUEST_LOGGING_ENABLED: bool = True

    @field_validator("DATABASE_URL")
    def normalize_database_url(cls, v: str) -> str:
        """Point bare PostgreSQL URLs at the asyncpg driver."""
        for prefix in ("postgres://", "postgresql://"):
            if v.startswith(prefix):
                return "postgresql+asyncpg://" + v[len(prefix):]
        if v.startswith("prisma://"):
            logger.warning("DATABASE_URL uses the prisma:// scheme, which SQLAlchemy cannot connect to")
        return v

    @field_validator("CORS_ORIGINS", "CORS_METHODS")
    def validate_list_or_string(cls, v: Union[List[str], str]) -> List[str]:
        """Convert comma-separated string to list if needed."""
        if isinstance(v, str):
            if not v.strip():
                return []
            if v == "*":
                return ["*"]
            return [item.strip() for item in v.split(",")]
        return v

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


# Create a singleton instance of the settings
settings = Settings()
