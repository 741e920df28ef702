"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the unified search use case, the viewer
role and the optional response cache. The use case is built from
infrastructure implementations here; routes depend only on these
dependencies, not on infra directly.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.application.interfaces.services import ICacheService
from app.application.use_cases.search import UnifiedSearchService
from app.core.config import get_settings
from app.domain.enums import ViewerRole
from app.infrastructure.external.storage import StorageFactory, StorageUrlSigner
from app.infrastructure.persistence.database import get_session_factory
from app.infrastructure.persistence.repositories.search import (
    ActivitySearchRepository,
    PostSearchRepository,
    TagSearchRepository,
    UserSearchRepository,
)
from app.infrastructure.security.jwt import viewer_role_from_token

_bearer = HTTPBearer(auto_error=False)


def get_viewer_role(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
) -> ViewerRole:
    """Viewer role from an optional Bearer token; anonymous when absent or invalid."""
    return viewer_role_from_token(credentials.credentials if credentials else None)


@lru_cache
def get_url_signer() -> StorageUrlSigner:
    """Avatar URL signer over the configured storage backend (one per process)."""
    settings = get_settings()
    storage = StorageFactory.create_storage_service(settings)
    return StorageUrlSigner(storage, ttl_seconds=settings.avatar_url_ttl_seconds)


def get_unified_search_service(
    url_signer: Annotated[StorageUrlSigner, Depends(get_url_signer)],
) -> UnifiedSearchService:
    """Unified search over the shared session factory.

    Raises SqlNotConfiguredException (503) when DATABASE_URL is not set.
    """
    settings = get_settings()
    session_factory = get_session_factory()
    slow_ms = settings.search_slow_query_ms
    return UnifiedSearchService(
        posts=PostSearchRepository(
            session_factory,
            half_life_days=settings.search_half_life_posts_days,
            slow_query_ms=slow_ms,
        ),
        activities=ActivitySearchRepository(
            session_factory,
            half_life_days=settings.search_half_life_activities_days,
            slow_query_ms=slow_ms,
        ),
        users=UserSearchRepository(
            session_factory,
            similarity_threshold=settings.search_user_similarity_threshold,
            slow_query_ms=slow_ms,
        ),
        tags=TagSearchRepository(session_factory, slow_query_ms=slow_ms),
        url_signer=url_signer,
    )


def get_search_cache(request: Request) -> ICacheService | None:
    """Response cache from app.state when Redis is enabled and connected."""
    cache = getattr(request.app.state, "cache", None)
    if cache is None or not cache.is_available():
        return None
    return cache
