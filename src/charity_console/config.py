"""Process-level settings read from ``CHARITY_*`` environment variables.

These describe the deployment (which document store, which Gemini key, how
to log). Per-organization preferences such as registration validity live in
the document store instead, see ``services.organization.SettingsService``.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class DocumentStoreType(str, Enum):
    """Backend behind ``DocumentStore``."""

    MEMORY = "memory"
    SQLITE = "sqlite"
    FIRESTORE = "firestore"


class Settings(BaseSettings):
    """Deployment settings.

    A ``.env`` file in the working directory is read as well, e.g.::

        CHARITY_DOCUMENT_STORE=firestore
        CHARITY_FIRESTORE_PROJECT_ID=lar-matilde
        CHARITY_GEMINI_API_KEY=...
    """

    model_config = SettingsConfigDict(
        env_prefix="CHARITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Charity Console"
    app_version: str = "0.1.0"
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False
    organization_name: str = Field(
        default="Lar Assistencial Matilde",
        description="Default name used in logs and AI prompts",
    )

    document_store: DocumentStoreType = DocumentStoreType.SQLITE
    sqlite_path: Path = Path("charity_console.db")
    firestore_project_id: str | None = Field(
        default=None,
        description="Firestore project; ambient Google credentials when unset",
    )

    log_level: LogLevel = LogLevel.INFO
    log_format: Literal["json", "console"] | None = Field(
        default=None, validate_default=True
    )
    log_file: Path | None = None

    api_host: str = "127.0.0.1"
    api_port: int = Field(default=8000, ge=1, le=65535)

    gemini_api_key: str | None = Field(
        default=None, description="AI assist stays off without a key"
    )
    gemini_model: str = "gemini-2.5-flash"

    address_lookup_url: str = "https://viacep.com.br/ws"
    address_lookup_timeout: float = Field(default=10.0, gt=0)

    @field_validator("log_format", mode="after")
    @classmethod
    def pick_log_format(
        cls, v: Literal["json", "console"] | None, info: ValidationInfo
    ) -> Literal["json", "console"]:
        # Deployed instances ship JSON unless told otherwise.
        if v is not None:
            return v
        if info.data.get("environment") in (Environment.STAGING, Environment.PRODUCTION):
            return "json"
        return "console"

    @field_validator("gemini_api_key", "firestore_project_id", mode="after")
    @classmethod
    def blank_is_unset(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v

    @property
    def ai_assist_enabled(self) -> bool:
        return self.gemini_api_key is not None


@lru_cache
def get_settings() -> Settings:
    """Settings for this process; ``get_settings.cache_clear()`` reloads them."""
    return Settings()
