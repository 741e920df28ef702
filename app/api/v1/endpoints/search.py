"""Search API: unified search across posts, activities, users and tags."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.v1.dependencies import (
    get_search_cache,
    get_unified_search_service,
    get_viewer_role,
)
from app.application.dtos.search import RawSearchParams
from app.application.interfaces.services import ICacheService
from app.application.services.query_normalizer import normalize_search_query
from app.application.use_cases.search import UnifiedSearchService
from app.core.config import get_settings
from app.domain.enums import ViewerRole
from app.infrastructure.cache.keys import search_response_key
from app.schemas.search import ErrorResponse, PostSuggestionsResponse, UnifiedSearchResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=UnifiedSearchResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid query text"},
        503: {"model": ErrorResponse, "description": "Search datastore unavailable"},
    },
)
async def search(
    search_svc: Annotated[UnifiedSearchService, Depends(get_unified_search_service)],
    viewer: Annotated[ViewerRole, Depends(get_viewer_role)],
    cache: Annotated[ICacheService | None, Depends(get_search_cache)],
    q: str | None = Query(None, description="Search text (1-100 characters)"),
    type: str | None = Query(None, description="all | posts | activities | users | tags"),
    page: str | None = Query(None, description="1-based page number"),
    limit: str | None = Query(None, description="Page size, 1-10"),
    sort: str | None = Query(None, description="relevance | latest"),
    author_id: str | None = Query(None),
    tag_ids: list[str] | None = Query(None, description="Repeatable or comma-separated"),
    date_from: str | None = Query(None, description="ISO date or datetime"),
    date_to: str | None = Query(None, description="ISO date or datetime"),
    only_published: str | None = Query(None, description="Ignored unless the viewer is an admin"),
) -> UnifiedSearchResponse:
    """Search every entity; the requested type gets the page, the others report totals.

    Parameters are taken as raw strings so out-of-range values are clamped
    to defaults instead of rejected.
    """
    raw = RawSearchParams(
        q=q,
        type=type,
        page=page,
        limit=limit,
        sort=sort,
        author_id=author_id,
        tag_ids=tag_ids,
        date_from=date_from,
        date_to=date_to,
        only_published=only_published,
    )
    can_view_drafts = viewer.can_view_drafts
    if cache is None:
        result = await search_svc.search(raw, can_view_drafts=can_view_drafts)
        return UnifiedSearchResponse.from_result(result)

    key = search_response_key(normalize_search_query(raw), can_view_drafts)
    cached = await cache.get(key)
    if cached is not None:
        return UnifiedSearchResponse.model_validate(cached)
    result = await search_svc.search(raw, can_view_drafts=can_view_drafts)
    response = UnifiedSearchResponse.from_result(result)
    await cache.set(
        key,
        response.model_dump(mode="json", by_alias=True),
        ttl=get_settings().search_cache_ttl,
    )
    return response


@router.get(
    "/suggestions",
    response_model=PostSuggestionsResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid query text"},
        503: {"model": ErrorResponse, "description": "Search datastore unavailable"},
    },
)
async def suggest_posts(
    search_svc: Annotated[UnifiedSearchService, Depends(get_unified_search_service)],
    viewer: Annotated[ViewerRole, Depends(get_viewer_role)],
    q: str | None = Query(None, description="Search text; under 2 characters returns nothing"),
    limit: str | None = Query(None, description="Number of posts, 1-10 (default 5)"),
    only_published: str | None = Query(None, description="Ignored unless the viewer is an admin"),
) -> PostSuggestionsResponse:
    """Typeahead over posts: relevance-ordered full-text matches without tags."""
    raw = RawSearchParams(q=q, limit=limit, only_published=only_published)
    result = await search_svc.suggest(raw, can_view_drafts=viewer.can_view_drafts)
    return PostSuggestionsResponse.model_validate(result)
