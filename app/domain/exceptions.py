"""Domain exceptions for the unified search service.

Defines domain-level exceptions that represent client errors and
unavailable dependencies. These exceptions are independent of
infrastructure concerns. Presentation layer maps them to HTTP responses
in exception handlers.
"""

from typing import Any


class UnifiedSearchException(Exception):
    """Base exception for all unified search errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, entity).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body: code, message and details."""
        return {
            "code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(UnifiedSearchException):
    """Raised when input validation fails (e.g. query text length or banned characters)."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        **details_extra: Any,
    ) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
            **details_extra: Optional keys merged into details (e.g. pattern).
        """
        details: dict[str, Any] = {"field": field} if field else {}
        details.update(details_extra)
        super().__init__(message, "VALIDATION_ERROR", details)


class SearchUnavailableException(UnifiedSearchException):
    """Raised when an entity search failed on both its primary and fallback path."""

    def __init__(self, entity: str) -> None:
        """Initialize with the failing entity.

        The underlying datastore error is logged server-side and chained as
        __cause__; it never reaches the response body.

        Args:
            entity: Entity bucket whose executor failed (e.g. 'posts').
        """
        super().__init__(
            f"Search is temporarily unavailable ({entity})",
            "SEARCH_UNAVAILABLE",
            {"entity": entity},
        )


class SqlNotConfiguredException(UnifiedSearchException):
    """Raised when an operation requires Postgres but DATABASE_URL is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
