"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.search import (
    ActivitySearchRepository,
    PostSearchRepository,
    TagSearchRepository,
    UserSearchRepository,
)

__all__ = [
    "ActivitySearchRepository",
    "PostSearchRepository",
    "TagSearchRepository",
    "UserSearchRepository",
]
