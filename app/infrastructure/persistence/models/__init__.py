"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.activity import Activity
from app.infrastructure.persistence.models.mixins import (
    CuidMixin,
    SoftDeleteMixin,
    TimestampMixin,
    search_vector_column,
)
from app.infrastructure.persistence.models.post import Post
from app.infrastructure.persistence.models.tag import PostTag, Tag
from app.infrastructure.persistence.models.user import User

__all__ = [
    "Activity",
    "CuidMixin",
    "Post",
    "PostTag",
    "SoftDeleteMixin",
    "Tag",
    "TimestampMixin",
    "User",
    "search_vector_column",
]
