# backend/app/core/config.py
import logging
import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import Field, SecretStr, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import BRAND_NAME, DEFAULT_SESSION_DURATION_MINUTES


def is_running_tests() -> bool:
    """
    Detect if code is running under pytest.

    PYTEST_CURRENT_TEST is set automatically by pytest during test runs, and is
    not expected to be present in production environments.
    """
    return os.getenv("PYTEST_CURRENT_TEST") is not None


logger = logging.getLogger(__name__)

# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = Path(__file__).parent.parent.parent / ".env"  # Goes up to backend/.env
    logger.debug(f"[CONFIG] Looking for .env at: {env_path}")
    load_dotenv(env_path)


class Settings(BaseSettings):
    """Runtime configuration for the booking backend."""

    app_name: str = BRAND_NAME
    environment: str = Field(default="development", description="development | staging | production")
    log_level: str = "INFO"

    # Database
    database_url: str = Field(
        default="sqlite:///./mentorship.db",
        validation_alias="DATABASE_URL",
    )
    test_database_url: str = Field(
        default="sqlite://",
        validation_alias="TEST_DATABASE_URL",
    )
    sql_echo: bool = False

    # Auth (tokens are issued elsewhere; we only verify them)
    secret_key: SecretStr = Field(
        default=SecretStr("change-me-in-production"),
        validation_alias="JWT_SECRET",
    )
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    auth_cookie_name: str = "token"

    # Booking rules
    default_session_duration_minutes: int = Field(
        default=DEFAULT_SESSION_DURATION_MINUTES,
        gt=0,
        description="Length of every booked session; not configurable per booking",
    )

    cors_origins: List[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    # Schema is created on startup; production deployments manage it out of band
    create_tables_on_startup: bool = True

    is_testing: bool = False

    # Use ConfigDict instead of Config class (Pydantic V2 style)
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        level = (v or "INFO").strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("database_url")
    @classmethod
    def _reject_test_url_in_production(cls, v: str, info: ValidationInfo) -> str:
        environment = (info.data.get("environment") or "").lower()
        if environment == "production" and v.startswith("sqlite"):
            raise ValueError("SQLite is not supported in production; set DATABASE_URL")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    def get_database_url(self) -> str:
        """Return the URL for the current process (test URL under pytest)."""
        if self.is_testing or is_running_tests():
            return self.test_database_url
        return self.database_url


settings = Settings()
