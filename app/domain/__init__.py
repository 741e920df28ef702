"""Domain layer: enums and exceptions for unified search.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import SearchMode, SearchSort, SearchType, UserStatus, ViewerRole
from app.domain.exceptions import (
    SearchUnavailableException,
    SqlNotConfiguredException,
    UnifiedSearchException,
    ValidationException,
)

__all__ = [
    # Enums
    "SearchMode",
    "SearchSort",
    "SearchType",
    "UserStatus",
    "ViewerRole",
    # Exceptions
    "SearchUnavailableException",
    "SqlNotConfiguredException",
    "UnifiedSearchException",
    "ValidationException",
]
