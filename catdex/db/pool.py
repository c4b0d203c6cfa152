"""Bounded database connection pool shared by all request handlers.

Wraps an SQLAlchemy Engine configured with a fixed-size QueuePool:

- ``pool_size`` connections, no overflow, so the size never changes after startup
- checkout blocks for up to ``pool_timeout`` seconds when every connection is
  in use, then fails with PoolExhaustedException
- a connection is owned by exactly one caller between checkout and release
- ``pool_pre_ping`` replaces connections the database has dropped

QueuePool is thread-safe, so one instance can be shared by reference across
the threadpool that serves requests.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import Connection, Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.pool import QueuePool

from catdex.config import Settings
from catdex.exceptions import (
    PoolExhaustedException,
    RecordStoreException,
    RecordStoreUnavailableException,
)
from catdex.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


class RecordStorePool:
    """Fixed-size pool of database connections with exclusive checkout."""

    def __init__(self, engine: Engine):
        """Wrap an already configured engine.

        Prefer ``RecordStorePool.from_settings`` which builds the engine.
        """
        self._engine = engine

    @classmethod
    def from_settings(cls, settings: Settings) -> "RecordStorePool":
        """Build the engine and pool from application settings.

        No connection is opened here; the first checkout connects.

        Raises:
            RecordStoreException: If the URL or driver cannot be used
        """
        connect_args: dict[str, Any] = {}
        backend = make_url(settings.database_url).get_backend_name()
        if backend == "sqlite":
            # Pooled connections move between worker threads
            connect_args["check_same_thread"] = False
        elif backend == "postgresql" and settings.db_statement_timeout_ms:
            connect_args["options"] = f"-c statement_timeout={settings.db_statement_timeout_ms}"

        try:
            engine = create_engine(
                settings.database_url,
                poolclass=QueuePool,
                pool_size=settings.db_pool_size,
                max_overflow=0,
                pool_timeout=settings.db_pool_timeout,
                pool_pre_ping=True,
                connect_args=connect_args,
            )
        except (ArgumentError, ImportError) as e:
            raise RecordStoreException(
                f"Failed to create database connection pool: {e}",
                details={"database_url": settings.safe_database_url},
            ) from e

        log_with_context(
            logger,
            "info",
            "Database connection pool created",
            database_url=settings.safe_database_url,
            pool_size=settings.db_pool_size,
            pool_timeout=settings.db_pool_timeout,
            event_type="db_pool_created",
        )
        return cls(engine)

    @property
    def engine(self) -> Engine:
        return self._engine

    def checkout(self) -> Connection:
        """Take a connection out of the pool.

        Blocks while the pool is exhausted, up to the configured timeout.
        Every successful checkout must be paired with exactly one ``release``.

        Raises:
            PoolExhaustedException: If no connection became free in time
            RecordStoreUnavailableException: If a new connection could not be opened
        """
        try:
            return self._engine.connect()
        except PoolTimeoutError as e:
            log_with_context(
                logger,
                "warning",
                "Timed out waiting for a database connection",
                event_type="db_pool_exhausted",
                **self.status(),
            )
            raise PoolExhaustedException(details=self.status()) from e
        except SQLAlchemyError as e:
            log_with_context(
                logger,
                "error",
                "Could not connect to database",
                error=str(e),
                error_type=type(e).__name__,
                event_type="db_unavailable",
            )
            raise RecordStoreUnavailableException(details={"error_type": type(e).__name__}) from e

    def release(self, connection: Connection) -> None:
        """Return a connection obtained from ``checkout`` to the pool."""
        # Closing a pooled Connection rolls back and hands the DBAPI connection back
        connection.close()

    @contextmanager
    def acquire(self) -> Iterator[Connection]:
        """Check out a connection for the duration of a ``with`` block.

        The connection goes back to the pool when the block exits, whether it
        completed or raised.
        """
        connection = self.checkout()
        try:
            yield connection
        finally:
            self.release(connection)

    def status(self) -> dict[str, int]:
        """Current pool occupancy."""
        pool = self._engine.pool
        if not isinstance(pool, QueuePool):
            return {}
        return {
            "pool_size": pool.size(),
            "checked_out": pool.checkedout(),
            "checked_in": pool.checkedin(),
        }

    def dispose(self) -> None:
        """Close every pooled connection (called during app shutdown)."""
        self._engine.dispose()
        log_with_context(
            logger,
            "info",
            "Database connection pool disposed",
            event_type="db_pool_disposed",
        )
