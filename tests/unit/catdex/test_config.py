"""Unit tests for configuration."""

from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from catdex.config import BASE_DIR, Settings


def test_settings_defaults():
    """Test Settings model has correct defaults."""
    settings = Settings(_env_file=None, database_url="sqlite:///catdex.db")

    assert settings.api_host == "127.0.0.1"
    assert settings.api_port == 8080
    assert settings.db_pool_size == 5
    assert settings.db_pool_timeout == 30.0
    assert settings.db_statement_timeout_ms is None
    assert settings.templates_dir == BASE_DIR / "templates"
    assert settings.static_dir == BASE_DIR / "static"
    assert settings.template_extension == ".html"
    assert settings.template_strict_undefined is False
    assert settings.static_directory_listing is False
    assert settings.environment == "development"


def test_settings_requires_database_url():
    """Test missing DATABASE_URL is a validation error."""
    with patch.dict("os.environ", {}, clear=True):
        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None)

    assert "database_url" in str(exc_info.value)


def test_settings_rejects_blank_database_url():
    """Test whitespace-only DATABASE_URL is rejected."""
    with pytest.raises(ValidationError):
        Settings(_env_file=None, database_url="   ")


def test_settings_rejects_malformed_database_url():
    """Test a string that is not a database URL is rejected."""
    with pytest.raises(ValidationError):
        Settings(_env_file=None, database_url="not a url")


@pytest.mark.parametrize(
    "url",
    [
        "postgres://cat:secret@db:5432/catdex",
        "postgresql://cat:secret@db:5432/catdex",
    ],
)
def test_settings_selects_psycopg_driver(url):
    """Test PostgreSQL URLs are pointed at the psycopg driver."""
    settings = Settings(_env_file=None, database_url=url)

    assert settings.database_url == "postgresql+psycopg://cat:secret@db:5432/catdex"


def test_settings_keeps_explicit_driver():
    """Test URLs that already name a driver are left alone."""
    settings = Settings(_env_file=None, database_url="postgresql+asyncpg://cat@db/catdex")

    assert settings.database_url == "postgresql+asyncpg://cat@db/catdex"


def test_safe_database_url_hides_password():
    """Test the password is masked for logging."""
    settings = Settings(_env_file=None, database_url="postgresql://cat:secret@db:5432/catdex")

    assert "secret" not in settings.safe_database_url
    assert "***" in settings.safe_database_url


def test_settings_env_loading():
    """Test settings can load from environment."""
    with patch.dict(
        "os.environ",
        {
            "DATABASE_URL": "sqlite:///env.db",
            "API_PORT": "9000",
            "DB_POOL_SIZE": "3",
            "TEMPLATES_DIR": "/srv/catdex/templates",
            "STATIC_DIRECTORY_LISTING": "true",
        },
    ):
        settings = Settings(_env_file=None)

        assert settings.database_url == "sqlite:///env.db"
        assert settings.api_port == 9000
        assert settings.db_pool_size == 3
        assert settings.templates_dir == Path("/srv/catdex/templates")
        assert settings.static_directory_listing is True


@pytest.mark.parametrize(
    ("environment", "flag", "expected"),
    [
        ("development", True, True),
        ("test", True, True),
        ("production", True, False),
        ("development", False, False),
    ],
)
def test_directory_listing_gated_outside_production(environment, flag, expected):
    """Test directory listing is never enabled in production."""
    settings = Settings(
        _env_file=None,
        database_url="sqlite:///catdex.db",
        environment=environment,
        static_directory_listing=flag,
    )

    assert settings.directory_listing_enabled is expected


def test_template_extension_normalised():
    """Test a bare extension gains its leading dot."""
    settings = Settings(_env_file=None, database_url="sqlite:///catdex.db", template_extension="hbs")

    assert settings.template_extension == ".hbs"


def test_invalid_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, database_url="sqlite:///catdex.db", log_level="LOUD")


def test_pool_size_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, database_url="sqlite:///catdex.db", db_pool_size=0)
