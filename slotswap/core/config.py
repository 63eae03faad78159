# slotswap/core/config.py
import logging
import os
from pathlib import Path
from typing import Literal, Set

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


def is_running_tests() -> bool:
    """
    Detect if code is running under pytest.

    PYTEST_CURRENT_TEST is set automatically by pytest during test runs, and is
    not expected to be present in production environments.
    """
    return os.getenv("PYTEST_CURRENT_TEST") is not None


_PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = _PROJECT_ROOT / ".env"
    logger.debug(f"[CONFIG] Looking for .env at: {env_path} (exists={env_path.exists()})")
    load_dotenv(env_path)


PROD_ENVIRONMENTS: Set[str] = {"prod", "production", "live"}


class Settings(BaseSettings):
    environment: str = Field(default="development", description="Deployment environment")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Root log level"
    )

    # Database
    database_url: str = Field(
        default="sqlite:///./slotswap.db",
        description="SQLAlchemy database URL",
    )
    database_echo: bool = Field(default=False, description="Echo SQL statements to the log")
    auto_create_tables: bool = Field(
        default=True,
        description="Create tables on startup (development only; production uses Alembic)",
    )

    # Identity is resolved upstream; we only trust the header it sets
    identity_header: str = Field(
        default="X-User-Id",
        description="Request header carrying the authenticated caller's user id",
    )

    api_title: str = "SlotSwap API"
    api_version: str = "0.1.0"

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("CI") else None,
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("identity_header")
    @classmethod
    def _validate_identity_header(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("identity_header must not be empty")
        return cleaned

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() in PROD_ENVIRONMENTS

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def should_create_tables(self) -> bool:
        """Startup table creation is never done against production databases."""
        return self.auto_create_tables and not self.is_production


settings = Settings()
