"""Logging setup for Catdex.

Records go to a rotating JSON file for machines and to stdout for people.
The listing handler runs in the threadpool, so JSON records carry the
thread name to tell concurrent requests apart.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from pythonjsonlogger import jsonlogger

DEFAULT_LOG_DIR = Path(__file__).parent.parent / "logs"
LOG_FILE_NAME = "catdex.log"
LOG_MAX_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5

JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(threadName)s %(message)s"
CONSOLE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# uvicorn.access is replaced by the request logging middleware
QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "uvicorn.access")


def setup_logging(log_level: str = "INFO", log_dir: Path | None = None) -> logging.Logger:
    """Replace the root logger's handlers with a JSON file and a console handler.

    Args:
        log_level: Console and root level name, e.g. ``"INFO"``
        log_dir: Directory for ``catdex.log`` (defaults to ``logs/`` in the repo)

    Returns:
        The root logger
    """
    level = logging.getLevelName(log_level.upper())
    log_dir = log_dir or DEFAULT_LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(level)

    file_handler = RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setFormatter(jsonlogger.JsonFormatter(JSON_FORMAT, timestamp=True))
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_with_context(logger: logging.Logger, level: str, message: str, **fields: Any) -> None:
    """Log ``message`` with ``fields`` attached as structured record attributes.

    Fields become top-level keys in the JSON log file; ``event_type`` is the
    conventional one to filter on.
    """
    getattr(logger, level.lower())(message, extra=fields)
