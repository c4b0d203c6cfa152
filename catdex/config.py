from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

BASE_DIR = Path(__file__).resolve().parent.parent  # catdex repo root


class Settings(BaseSettings):
    """Application settings with validation.

    ``database_url`` is required and raises a validation error when missing,
    so the process refuses to start without it. Everything else has a default
    matching a local development setup.
    """

    # Database - required
    database_url: str = Field(min_length=1, description="SQLAlchemy database URL (e.g., 'postgresql://...')")
    db_pool_size: int = Field(default=5, ge=1, le=100, description="Number of pooled connections")
    db_pool_timeout: float = Field(default=30.0, gt=0, description="Seconds to wait for a free connection")
    db_statement_timeout_ms: int | None = Field(
        default=None, ge=1, description="PostgreSQL statement_timeout applied to pooled connections"
    )

    # API server settings
    api_host: str = Field(default="127.0.0.1", min_length=1, description="API server host")
    api_port: int = Field(ge=1, le=65535, default=8080, description="API server port")

    # Templates and static assets
    templates_dir: Path = Field(default=BASE_DIR / "templates", description="Directory of page templates")
    template_extension: str = Field(default=".html", description="File extension of registered templates")
    template_strict_undefined: bool = Field(
        default=False, description="Fail rendering when a template references missing data"
    )
    static_dir: Path = Field(default=BASE_DIR / "static", description="Directory served under /static")
    static_directory_listing: bool = Field(
        default=False, description="List directory contents under /static (ignored in production)"
    )

    environment: Literal["development", "test", "production"] = Field(default="development")
    rate_limit_default: str = Field(default="60/minute", description="Default per-IP rate limit")
    log_level: str = Field(default="INFO", description="Root log level")

    model_config = SettingsConfigDict(
        env_file=Path(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @property
    def directory_listing_enabled(self) -> bool:
        """Directory listing is only honoured outside production."""
        return self.static_directory_listing and self.environment != "production"

    @property
    def safe_database_url(self) -> str:
        """Database URL with the password masked, for logging."""
        return make_url(self.database_url).render_as_string(hide_password=True)

    @field_validator("database_url", mode="after")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Ensure database_url parses as an SQLAlchemy URL."""
        v = v.strip()
        if not v:
            raise ValueError("database_url cannot be empty")
        try:
            make_url(v)
        except ArgumentError as e:
            raise ValueError(f"database_url is not a valid database URL: {e}") from e
        # Some hosts hand out postgres:// but SQLAlchemy requires postgresql://
        if v.startswith("postgres://"):
            v = v.replace("postgres://", "postgresql+psycopg://", 1)
        elif v.startswith("postgresql://"):
            v = v.replace("postgresql://", "postgresql+psycopg://", 1)
        return v

    @field_validator("api_host", mode="after")
    @classmethod
    def validate_api_host(cls, v: str) -> str:
        """Ensure api_host is not empty or whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("api_host cannot be empty")
        return v

    @field_validator("template_extension", mode="after")
    @classmethod
    def validate_template_extension(cls, v: str) -> str:
        """Normalise the extension to start with a dot."""
        v = v.strip()
        if not v:
            raise ValueError("template_extension cannot be empty")
        return v if v.startswith(".") else f".{v}"

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log_level is a known logging level name."""
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"log_level must be a standard level name, got {v!r}")
        return v


# Singleton settings instance (cached for performance)
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get singleton Settings instance.

    Reads the environment and .env file once; missing DATABASE_URL raises a
    pydantic ValidationError here, before the server binds.

    Returns:
        Cached Settings instance
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
