"""Custom exceptions for Catdex with proper HTTP status codes."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error responses."""

    # Generic errors
    CATDEX_ERROR = "CATDEX_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Record store errors
    RECORD_STORE_ERROR = "RECORD_STORE_ERROR"
    RECORD_STORE_UNAVAILABLE = "RECORD_STORE_UNAVAILABLE"
    POOL_EXHAUSTED = "POOL_EXHAUSTED"
    RECORD_QUERY_ERROR = "RECORD_QUERY_ERROR"

    # Template errors
    TEMPLATE_ERROR = "TEMPLATE_ERROR"
    TEMPLATE_LOAD_ERROR = "TEMPLATE_LOAD_ERROR"
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"
    TEMPLATE_RENDER_ERROR = "TEMPLATE_RENDER_ERROR"

    # Configuration errors
    CONFIG_ERROR = "CONFIG_ERROR"


class CatdexException(Exception):
    """Base exception for Catdex errors with HTTP status code support.

    All custom exceptions should inherit from this class to ensure
    consistent error handling across the application.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CATDEX_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        """Initialize Catdex exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            status_code: HTTP status code (default 500)
            details: Additional error context/details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class ConfigurationException(CatdexException):
    """Configuration errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)


class RecordStoreException(CatdexException):
    """Record store (database) errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.RECORD_STORE_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)


class PoolExhaustedException(RecordStoreException):
    """No pooled connection became available within the checkout timeout."""

    def __init__(self, message: str = "Database connection pool exhausted", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.POOL_EXHAUSTED,
            status_code=503,
            details=details,
        )


class RecordStoreUnavailableException(RecordStoreException):
    """Database could not be reached."""

    def __init__(self, message: str = "Database unavailable", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.RECORD_STORE_UNAVAILABLE,
            status_code=503,
            details=details,
        )


class RecordQueryException(RecordStoreException):
    """Listing query failed."""

    def __init__(self, message: str = "Failed to load cats", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.RECORD_QUERY_ERROR,
            status_code=500,
            details=details,
        )


class TemplateException(CatdexException):
    """Template registry errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.TEMPLATE_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)


class TemplateLoadException(TemplateException):
    """Template directory missing, unreadable, or holding an invalid template."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.TEMPLATE_LOAD_ERROR,
            status_code=500,
            details=details,
        )


class TemplateNotFoundException(TemplateException):
    """No template registered under the requested name."""

    def __init__(self, template_name: str, details: dict[str, Any] | None = None):
        self.template_name = template_name
        super().__init__(
            f"Template not found: {template_name!r}",
            code=ErrorCode.TEMPLATE_NOT_FOUND,
            status_code=500,
            details=details,
        )


class TemplateRenderException(TemplateException):
    """Template exists but rendering it failed."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.TEMPLATE_RENDER_ERROR,
            status_code=500,
            details=details,
        )
