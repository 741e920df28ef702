"""Infrastructure exceptions for storage operations.

Storage errors extend UnifiedSearchException so presentation can map them
to HTTP responses consistently.
"""

from app.domain.exceptions import UnifiedSearchException


class StorageException(UnifiedSearchException):
    """Base exception for storage operations."""


class StorageSigningError(StorageException):
    """Generating signed download URLs failed."""

    def __init__(self, file_paths: list[str], reason: str) -> None:
        super().__init__(
            f"Failed to sign {len(file_paths)} storage reference(s)",
            "STORAGE_SIGNING_ERROR",
            {"file_paths": file_paths, "reason": reason},
        )


class StoragePermissionError(StorageException):
    """Storage reference escapes the storage root."""

    def __init__(self, file_path: str, operation: str) -> None:
        super().__init__(
            f"Permission denied for {operation} on {file_path}",
            "STORAGE_PERMISSION_ERROR",
            {"file_path": file_path, "operation": operation},
        )
