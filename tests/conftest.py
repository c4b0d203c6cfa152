"""Pytest configuration and shared fixtures."""

from collections.abc import Callable, Iterable

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, insert

from catdex.config import BASE_DIR, Settings
from catdex.core.app_factory import create_app
from catdex.db.pool import RecordStorePool
from catdex.db.schema import cats, metadata


@pytest.fixture
def database_url(tmp_path):
    """SQLite database file with an empty cats table."""
    url = f"sqlite:///{tmp_path / 'catdex.db'}"
    engine = create_engine(url)
    metadata.create_all(engine)
    engine.dispose()
    return url


@pytest.fixture
def seed_cats(database_url) -> Callable[[Iterable[dict]], None]:
    """Insert rows into the cats table."""

    def _seed(rows: Iterable[dict]) -> None:
        engine = create_engine(database_url)
        with engine.begin() as connection:
            connection.execute(insert(cats), list(rows))
        engine.dispose()

    return _seed


@pytest.fixture
def make_cats():
    """Build ``count`` distinct cat rows."""

    def _make(count: int) -> list[dict]:
        return [{"id": i, "name": f"Cat {i}", "image_path": f"image/cat-{i}.png"} for i in range(1, count + 1)]

    return _make


@pytest.fixture
def static_dir(tmp_path):
    """Static asset directory with a stylesheet and an image."""
    root = tmp_path / "static"
    (root / "css").mkdir(parents=True)
    (root / "image").mkdir()
    (root / "css" / "index.css").write_text("body { margin: 0; }\n", encoding="utf-8")
    (root / "image" / "tom.png").write_bytes(b"\x89PNG\r\n\x1a\nfake")
    return root


@pytest.fixture
def templates_dir():
    """The application's own template directory."""
    return BASE_DIR / "templates"


@pytest.fixture
def make_settings(database_url, static_dir, templates_dir):
    """Build Settings for tests, ignoring any .env file."""

    def _make(**overrides) -> Settings:
        values = {
            "database_url": database_url,
            "templates_dir": templates_dir,
            "static_dir": static_dir,
            "environment": "test",
            "rate_limit_default": "1000/minute",
            "db_pool_size": 2,
            "db_pool_timeout": 2.0,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def settings(make_settings):
    return make_settings()


@pytest.fixture
def pool(settings):
    """Connection pool against the test database."""
    record_store_pool = RecordStorePool.from_settings(settings)
    yield record_store_pool
    record_store_pool.dispose()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def test_client(app):
    """FastAPI test client with lifespan context."""
    with TestClient(app) as client:
        yield client
