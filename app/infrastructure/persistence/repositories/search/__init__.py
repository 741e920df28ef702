"""Entity search repositories (posts, activities, users, tags)."""

from app.infrastructure.persistence.repositories.search.activities import (
    ActivitySearchRepository,
)
from app.infrastructure.persistence.repositories.search.fallback import with_fallback
from app.infrastructure.persistence.repositories.search.posts import PostSearchRepository
from app.infrastructure.persistence.repositories.search.tags import TagSearchRepository
from app.infrastructure.persistence.repositories.search.users import UserSearchRepository

__all__ = [
    "ActivitySearchRepository",
    "PostSearchRepository",
    "TagSearchRepository",
    "UserSearchRepository",
    "with_fallback",
]
