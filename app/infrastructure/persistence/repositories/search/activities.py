"""Activity search: full-text with recency decay, substring fallback."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.search import ActivityHit, EntitySearchParams, SearchPage
from app.domain.enums import SearchMode
from app.infrastructure.persistence.models import Activity
from app.infrastructure.persistence.repositories.search.base import BaseSearchRepository
from app.infrastructure.persistence.repositories.search.fallback import with_fallback
from app.infrastructure.persistence.repositories.search.filters import (
    activity_filters,
    ilike_any,
)
from app.infrastructure.persistence.repositories.search.rank import (
    build_ts_query,
    ordinal_rank,
    recency_order_by,
    ts_order_by,
    ts_rank_expression,
)
from app.shared.telemetry.tracing import traced

_ACTIVITY_COLUMNS = (
    Activity.id,
    Activity.content,
    Activity.image_urls,
    Activity.created_at,
    Activity.author_id,
)


class ActivitySearchRepository(BaseSearchRepository[ActivityHit]):
    entity = "activities"
    model = Activity

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        half_life_days: float = 7.0,
        slow_query_ms: int = 500,
    ) -> None:
        super().__init__(session_factory, slow_query_ms=slow_query_ms)
        self.half_life_days = half_life_days
        self.search = with_fallback(self.search_ts, self.search_like, self.entity)

    @traced("search.activities.ts", attributes={"entity": "activities", "mode": "ts"})
    async def search_ts(self, params: EntitySearchParams) -> SearchPage[ActivityHit]:
        ts_query = build_ts_query(params.query)
        rank = ts_rank_expression(
            Activity.search_vector, ts_query, Activity.created_at, self.half_life_days
        ).label("rank")
        async with self.session_factory() as session:
            rows, total = await self._fetch_page(
                session,
                mode=SearchMode.TS,
                columns=(*_ACTIVITY_COLUMNS, rank),
                filters=activity_filters(params, Activity.search_vector.op("@@")(ts_query)),
                order_by=ts_order_by(rank, Activity.created_at, Activity.id, params.sort),
                params=params,
            )
            items = await self._to_hits(
                session, rows, [float(row["rank"]) for row in rows]
            )
        return SearchPage(items=items, total=total)

    @traced("search.activities.like", attributes={"entity": "activities", "mode": "like"})
    async def search_like(self, params: EntitySearchParams) -> SearchPage[ActivityHit]:
        async with self.session_factory() as session:
            rows, total = await self._fetch_page(
                session,
                mode=SearchMode.LIKE,
                columns=_ACTIVITY_COLUMNS,
                filters=activity_filters(params, ilike_any(params.query, Activity.content)),
                order_by=recency_order_by(Activity.created_at, Activity.id),
                params=params,
            )
            ranks = [ordinal_rank(params.offset, i) for i in range(len(rows))]
            items = await self._to_hits(session, rows, ranks)
        return SearchPage(items=items, total=total)

    async def _to_hits(
        self, session: AsyncSession, rows: Sequence[RowMapping], ranks: list[float]
    ) -> list[ActivityHit]:
        if not rows:
            return []
        authors = await self._load_authors(session, (row["author_id"] for row in rows))
        return [
            ActivityHit(
                id=row["id"],
                content=row["content"],
                image_urls=list(row["image_urls"] or []),
                created_at=row["created_at"],
                rank=rank,
                author=self._author_for(authors, row["author_id"]),
            )
            for row, rank in zip(rows, ranks, strict=True)
        ]
