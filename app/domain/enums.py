"""Domain enumerations for unified search.

Enums represent fixed sets of domain values (search types, sort orders,
execution modes, user status and viewer roles).
"""

from enum import Enum


class SearchType(str, Enum):
    """Which entity bucket a search request targets.

    ALL queries every entity with the real page; a single entity type gets
    the real page while the other buckets only contribute their totals.
    """

    ALL = "all"
    POSTS = "posts"
    ACTIVITIES = "activities"
    USERS = "users"
    TAGS = "tags"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid type values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [t.value for t in cls]

    @classmethod
    def entities(cls) -> list["SearchType"]:
        """Return the concrete entity types (everything except ALL)."""
        return [t for t in cls if t is not cls.ALL]


class SearchSort(str, Enum):
    """Result ordering: relevance (rank with recency decay) or latest first."""

    RELEVANCE = "relevance"
    LATEST = "latest"

    @classmethod
    def values(cls) -> list[str]:
        return [s.value for s in cls]


class SearchMode(str, Enum):
    """How an executor matches text.

    TS is PostgreSQL full-text search, TRIGRAM uses pg_trgm similarity and
    LIKE is the case-insensitive substring fallback.
    """

    TS = "ts"
    TRIGRAM = "trigram"
    LIKE = "like"


class UserStatus(str, Enum):
    """Account status. Only ACTIVE users are searchable."""

    ACTIVE = "active"
    BANNED = "banned"
    DELETED = "deleted"


class ViewerRole(str, Enum):
    """Role of the caller, supplied by the route layer."""

    ANONYMOUS = "anonymous"
    USER = "user"
    AUTHOR = "author"
    ADMIN = "admin"

    @property
    def can_view_drafts(self) -> bool:
        """Only administrators may search unpublished posts."""
        return self is ViewerRole.ADMIN
