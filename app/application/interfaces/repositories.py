"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.search import (
        ActivityHit,
        EntitySearchParams,
        PostHit,
        SearchPage,
        TagHit,
        UserHit,
    )


# Post search repository interface
class IPostSearchRepository(Protocol):
    """Protocol for post search (full-text with substring fallback)."""

    async def search(self, params: EntitySearchParams) -> SearchPage[PostHit]:
        """Return one ranked page of matching posts and the full match count."""

    async def suggest(self, params: EntitySearchParams) -> SearchPage[PostHit]:
        """Return the top posts by text-search relevance, without tags."""


# Activity search repository interface
class IActivitySearchRepository(Protocol):
    """Protocol for activity search (full-text with substring fallback)."""

    async def search(self, params: EntitySearchParams) -> SearchPage[ActivityHit]:
        """Return one ranked page of matching activities and the full match count."""


# User search repository interface
class IUserSearchRepository(Protocol):
    """Protocol for user search (trigram similarity with substring fallback)."""

    async def search(self, params: EntitySearchParams) -> SearchPage[UserHit]:
        """Return one ranked page of matching users and the full match count."""


# Tag search repository interface
class ITagSearchRepository(Protocol):
    """Protocol for tag search (substring match ordered by popularity)."""

    async def search(self, params: EntitySearchParams) -> SearchPage[TagHit]:
        """Return one page of matching tags and the full match count."""
