"""Post search: full-text with recency decay, substring fallback."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import replace

from sqlalchemy import RowMapping, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.search import (
    EntitySearchParams,
    PostHit,
    SearchPage,
    TagSummary,
)
from app.domain.enums import SearchMode, SearchSort
from app.infrastructure.persistence.models import Post, PostTag, Tag
from app.infrastructure.persistence.repositories.search.base import BaseSearchRepository
from app.infrastructure.persistence.repositories.search.fallback import with_fallback
from app.infrastructure.persistence.repositories.search.filters import (
    ilike_any,
    post_effective_timestamp,
    post_filters,
)
from app.infrastructure.persistence.repositories.search.rank import (
    build_ts_query,
    ordinal_rank,
    recency_order_by,
    ts_order_by,
    ts_rank_expression,
)
from app.shared.telemetry.tracing import traced

_POST_COLUMNS = (
    Post.id,
    Post.slug,
    Post.title,
    Post.excerpt,
    Post.cover_image,
    Post.published,
    Post.published_at,
    Post.created_at,
    Post.author_id,
)


class PostSearchRepository(BaseSearchRepository[PostHit]):
    """Searches posts; search() runs full-text mode with the substring mode as fallback."""

    entity = "posts"
    model = Post

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        half_life_days: float = 30.0,
        slow_query_ms: int = 500,
    ) -> None:
        super().__init__(session_factory, slow_query_ms=slow_query_ms)
        self.half_life_days = half_life_days
        self.search = with_fallback(self.search_ts, self.search_like, self.entity)

    @traced("search.posts.ts", attributes={"entity": "posts", "mode": "ts"})
    async def search_ts(self, params: EntitySearchParams) -> SearchPage[PostHit]:
        return await self._run_ts(params, include_tags=True)

    @traced("search.posts.suggest", attributes={"entity": "posts", "mode": "ts"})
    async def suggest(self, params: EntitySearchParams) -> SearchPage[PostHit]:
        """Typeahead: first page by relevance, tags not loaded, no substring fallback."""
        params = replace(params, offset=0, sort=SearchSort.RELEVANCE)
        return await self._run_ts(params, include_tags=False)

    async def _run_ts(
        self, params: EntitySearchParams, *, include_tags: bool
    ) -> SearchPage[PostHit]:
        ts_query = build_ts_query(params.query)
        effective = post_effective_timestamp()
        rank = ts_rank_expression(
            Post.search_vector, ts_query, effective, self.half_life_days
        ).label("rank")
        async with self.session_factory() as session:
            rows, total = await self._fetch_page(
                session,
                mode=SearchMode.TS,
                columns=(*_POST_COLUMNS, rank),
                filters=post_filters(params, Post.search_vector.op("@@")(ts_query)),
                order_by=ts_order_by(rank, effective, Post.id, params.sort),
                params=params,
            )
            items = await self._to_hits(
                session,
                rows,
                [float(row["rank"]) for row in rows],
                include_tags=include_tags,
            )
        return SearchPage(items=items, total=total)

    @traced("search.posts.like", attributes={"entity": "posts", "mode": "like"})
    async def search_like(self, params: EntitySearchParams) -> SearchPage[PostHit]:
        match = ilike_any(params.query, Post.title, Post.excerpt, Post.content)
        async with self.session_factory() as session:
            rows, total = await self._fetch_page(
                session,
                mode=SearchMode.LIKE,
                columns=_POST_COLUMNS,
                filters=post_filters(params, match),
                order_by=recency_order_by(post_effective_timestamp(), Post.id),
                params=params,
            )
            ranks = [ordinal_rank(params.offset, i) for i in range(len(rows))]
            items = await self._to_hits(session, rows, ranks)
        return SearchPage(items=items, total=total)

    async def _to_hits(
        self,
        session: AsyncSession,
        rows: Sequence[RowMapping],
        ranks: list[float],
        *,
        include_tags: bool = True,
    ) -> list[PostHit]:
        if not rows:
            return []
        authors = await self._load_authors(session, (row["author_id"] for row in rows))
        tags: dict[str, list[TagSummary]] = {}
        if include_tags:
            tags = await self._load_tags(session, (row["id"] for row in rows))
        return [
            PostHit(
                id=row["id"],
                slug=row["slug"],
                title=row["title"],
                excerpt=row["excerpt"],
                cover_image=row["cover_image"],
                published=row["published"],
                published_at=row["published_at"],
                created_at=row["created_at"],
                rank=rank,
                author=self._author_for(authors, row["author_id"]),
                tags=tags.get(row["id"], []),
            )
            for row, rank in zip(rows, ranks, strict=True)
        ]

    async def _load_tags(
        self, session: AsyncSession, post_ids: Iterable[str]
    ) -> dict[str, list[TagSummary]]:
        """Batch-load tags of the page's posts, ordered by tag name."""
        ids = sorted(set(post_ids))
        stmt = (
            select(PostTag.post_id, Tag.id, Tag.name, Tag.slug, Tag.color)
            .join(Tag, Tag.id == PostTag.tag_id)
            .where(PostTag.post_id.in_(ids))
            .order_by(Tag.name.asc(), Tag.id.asc())
        )
        by_post: dict[str, list[TagSummary]] = {}
        for row in (await session.execute(stmt)).mappings().all():
            by_post.setdefault(row["post_id"], []).append(
                TagSummary(id=row["id"], name=row["name"], slug=row["slug"], color=row["color"])
            )
        return by_post
