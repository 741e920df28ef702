"""Unified search use case: fan out to the four entity searches and merge."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from app.application.dtos.search import (
    EntitySearchParams,
    PostSuggestions,
    RawSearchParams,
    SearchBucket,
    SearchPage,
    SearchQuery,
    UnifiedSearchResult,
    UserHit,
)
from app.application.services.query_normalizer import (
    normalize_search_query,
    normalize_suggestion_query,
)
from app.core.constants import SEARCH_SUGGESTION_MIN_LENGTH
from app.domain.enums import SearchType
from app.domain.exceptions import SearchUnavailableException, UnifiedSearchException
from app.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from app.application.interfaces.repositories import (
        IActivitySearchRepository,
        IPostSearchRepository,
        ITagSearchRepository,
        IUserSearchRepository,
    )
    from app.application.interfaces.services import IUrlSigner

logger = logging.getLogger(__name__)


class UnifiedSearchService:
    """Searches posts, activities, users and tags concurrently for one request.

    The requested entity (every entity for type=all) gets the real page;
    the others run with limit=1, offset=0 so the response can still report
    their totals. A failure that survives an entity's own fallback fails
    the whole response.
    """

    def __init__(
        self,
        posts: IPostSearchRepository,
        activities: IActivitySearchRepository,
        users: IUserSearchRepository,
        tags: ITagSearchRepository,
        url_signer: IUrlSigner,
    ) -> None:
        self.posts = posts
        self.activities = activities
        self.users = users
        self.tags = tags
        self.url_signer = url_signer

    @staticmethod
    def entity_params(query: SearchQuery, selected: bool) -> EntitySearchParams:
        """Executor params; non-selected entities are only counted (limit=1, offset=0)."""
        return EntitySearchParams(
            query=query.text,
            limit=query.limit if selected else 1,
            offset=query.offset if selected else 0,
            sort=query.sort,
            author_id=query.author_id,
            tag_ids=query.tag_ids,
            date_from=query.date_from,
            date_to=query.date_to,
            only_published=query.only_published,
        )

    @traced("search.unified")
    async def search(
        self, raw: RawSearchParams, *, can_view_drafts: bool = False
    ) -> UnifiedSearchResult:
        """Run a unified search.

        Args:
            raw: Unvalidated request parameters.
            can_view_drafts: Viewer may see unpublished posts; otherwise
                only_published is forced on.

        Returns:
            Merged result with one bucket per entity.

        Raises:
            ValidationException: Query text is invalid (no search is issued).
            SearchUnavailableException: An entity search failed on its fallback path.
        """
        query = normalize_search_query(raw)
        if not can_view_drafts and not query.only_published:
            query = replace(query, only_published=True)
        add_span_attributes(
            **{"search.type": query.type.value, "search.page": query.page, "search.limit": query.limit}
        )

        def selected(entity: SearchType) -> bool:
            return query.type is SearchType.ALL or query.type is entity

        executors: dict[SearchType, Any] = {
            SearchType.POSTS: self.posts,
            SearchType.ACTIVITIES: self.activities,
            SearchType.USERS: self.users,
            SearchType.TAGS: self.tags,
        }
        entities = SearchType.entities()
        results = await asyncio.gather(
            *(
                executors[entity].search(self.entity_params(query, selected(entity)))
                for entity in entities
            ),
            return_exceptions=True,
        )

        pages: dict[SearchType, SearchPage[Any]] = {}
        for entity, result in zip(entities, results, strict=True):
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, UnifiedSearchException):
                raise result
            if isinstance(result, BaseException):
                logger.error("Search failed for %s", entity.value, exc_info=result)
                raise SearchUnavailableException(entity.value) from result
            pages[entity] = result if selected(entity) else SearchPage(items=[], total=result.total)

        pages[SearchType.USERS] = await self._sign_avatars(pages[SearchType.USERS])

        def bucket(entity: SearchType) -> SearchBucket[Any]:
            return SearchBucket.from_page(pages[entity], query.page, query.limit)

        return UnifiedSearchResult(
            query=query.text,
            type=query.type,
            page=query.page,
            limit=query.limit,
            overall_total=sum(page.total for page in pages.values()),
            posts=bucket(SearchType.POSTS),
            activities=bucket(SearchType.ACTIVITIES),
            users=bucket(SearchType.USERS),
            tags=bucket(SearchType.TAGS),
        )

    @traced("search.suggest")
    async def suggest(
        self, raw: RawSearchParams, *, can_view_drafts: bool = False
    ) -> PostSuggestions:
        """Top posts for a typeahead box: text search by relevance, no tags.

        Queries shorter than SEARCH_SUGGESTION_MIN_LENGTH return nothing
        without touching the datastore.

        Raises:
            ValidationException: Query text is invalid.
            SearchUnavailableException: The post text search failed.
        """
        query = normalize_suggestion_query(raw)
        if len(query.text) < SEARCH_SUGGESTION_MIN_LENGTH:
            return PostSuggestions(query=query.text, items=[], total=0)
        if not can_view_drafts and not query.only_published:
            query = replace(query, only_published=True)
        add_span_attributes(**{"search.limit": query.limit})
        try:
            page = await self.posts.suggest(self.entity_params(query, True))
        except UnifiedSearchException:
            raise
        except Exception as e:
            logger.error("Suggestion search failed", exc_info=e)
            raise SearchUnavailableException(SearchType.POSTS.value) from e
        return PostSuggestions(query=query.text, items=page.items, total=page.total)

    async def _sign_avatars(self, page: SearchPage[UserHit]) -> SearchPage[UserHit]:
        """Replace avatar references with signed URLs in one signer call."""
        refs = list(dict.fromkeys(u.avatar_url for u in page.items if u.avatar_url))
        if not refs:
            return page
        signed = await self.url_signer.sign_many(refs)
        items = [
            replace(u, avatar_url=signed.get(u.avatar_url, u.avatar_url)) if u.avatar_url else u
            for u in page.items
        ]
        return SearchPage(items=items, total=page.total)
