from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_name: str = Field(default="Moderation Threads API", description="Human readable service name")
    environment: str = Field(default="development", description="Deployment environment name")
    debug: bool = Field(default=False, description="Echo SQL statements and enable debug mode")
    log_level: str = Field(default="INFO", description="Root logging level")

    database_user: str = Field(default="modthreads", validation_alias=AliasChoices("DB_USER", "database_user"))
    database_password: str = Field(
        default="modthreads", validation_alias=AliasChoices("DB_PASSWORD", "database_password")
    )
    database_host: str = Field(default="db", validation_alias=AliasChoices("DB_HOST", "database_host"))
    database_port: int = Field(default=3306, validation_alias=AliasChoices("DB_PORT", "database_port"))
    database_name: str = Field(default="modthreads", validation_alias=AliasChoices("DB_NAME", "database_name"))
    database_url_override: str | None = Field(
        default=None,
        validation_alias=AliasChoices("DATABASE_URL", "database_url_override"),
        description="Full SQLAlchemy URL; takes precedence over the individual DB_* settings.",
    )
    database_pool_size: int = Field(
        default=10, ge=1, validation_alias=AliasChoices("DB_POOL_SIZE", "database_pool_size")
    )
    database_max_overflow: int = Field(
        default=20, ge=0, validation_alias=AliasChoices("DB_MAX_OVERFLOW", "database_max_overflow")
    )

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parents[1] / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return (
            f"mysql+pymysql://{self.database_user}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: str | None) -> str:
        if value in (None, ""):
            return "INFO"
        level = str(value).strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unsupported log level: {value}")
        return level

    @field_validator("database_url_override", mode="before")
    @classmethod
    def blank_url_is_unset(cls, value: str | None) -> str | None:
        if value in (None, "", Ellipsis):
            return None
        return str(value).strip() or None


@lru_cache
def get_settings() -> Settings:
    return Settings()
