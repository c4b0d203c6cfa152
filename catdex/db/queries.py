"""Read-only queries against the record store."""

from pydantic import ValidationError
from sqlalchemy import Connection, select
from sqlalchemy.exc import SQLAlchemyError

from catdex.db.schema import cats
from catdex.exceptions import RecordQueryException
from catdex.logging_config import get_logger, log_with_context
from catdex.models import LISTING_LIMIT, Cat

logger = get_logger(__name__)


def fetch_records(connection: Connection, limit: int = LISTING_LIMIT) -> list[Cat]:
    """Load up to ``limit`` cats in whatever order the store returns them.

    Args:
        connection: Connection checked out from the pool
        limit: Maximum number of rows to return

    Returns:
        List of Cat records, empty when the table is empty

    Raises:
        ValueError: If limit is not a positive integer
        RecordQueryException: If the query fails or rows don't match the Cat shape
    """
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValueError(f"limit must be a positive integer, got {limit!r}")

    statement = select(cats.c.id, cats.c.name, cats.c.image_path).limit(limit)

    try:
        rows = connection.execute(statement).all()
    except SQLAlchemyError as e:
        log_with_context(
            logger,
            "error",
            "Listing query failed",
            error=str(e),
            error_type=type(e).__name__,
            event_type="db_query_error",
        )
        raise RecordQueryException(details={"error_type": type(e).__name__}) from e

    try:
        records = [Cat.model_validate(dict(row._mapping)) for row in rows]
    except ValidationError as e:
        log_with_context(
            logger,
            "error",
            "Row does not match cat schema",
            error=str(e),
            event_type="db_schema_mismatch",
        )
        raise RecordQueryException("Cat rows do not match the expected schema") from e

    log_with_context(
        logger,
        "debug",
        "Loaded cats",
        count=len(records),
        limit=limit,
        event_type="db_query",
    )
    return records
