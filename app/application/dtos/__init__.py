"""Application DTOs (no ORM dependency)."""

from app.application.dtos.search import (
    ActivityHit,
    AuthorSummary,
    EntitySearchParams,
    PostHit,
    PostSuggestions,
    RawSearchParams,
    SearchBucket,
    SearchPage,
    SearchQuery,
    TagHit,
    TagSummary,
    UnifiedSearchResult,
    UserHit,
)

__all__ = [
    "ActivityHit",
    "AuthorSummary",
    "EntitySearchParams",
    "PostHit",
    "PostSuggestions",
    "RawSearchParams",
    "SearchBucket",
    "SearchPage",
    "SearchQuery",
    "TagHit",
    "TagSummary",
    "UnifiedSearchResult",
    "UserHit",
]
