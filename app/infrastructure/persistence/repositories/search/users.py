"""User search: pg_trgm similarity on name and bio, substring fallback.

Without the pg_trgm extension similarity() does not exist; that error is
what sends the request to the substring mode.
"""

from __future__ import annotations

from sqlalchemy import RowMapping, or_
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.search import EntitySearchParams, SearchPage, UserHit
from app.domain.enums import SearchMode
from app.infrastructure.persistence.models import User
from app.infrastructure.persistence.repositories.search.base import BaseSearchRepository
from app.infrastructure.persistence.repositories.search.fallback import with_fallback
from app.infrastructure.persistence.repositories.search.filters import (
    ilike_any,
    user_filters,
)
from app.infrastructure.persistence.repositories.search.rank import (
    ordinal_rank,
    trigram_similarity,
)
from app.shared.telemetry.tracing import traced

_USER_COLUMNS = (User.id, User.name, User.avatar_url, User.bio, User.created_at)


class UserSearchRepository(BaseSearchRepository[UserHit]):
    entity = "users"
    model = User

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        similarity_threshold: float = 0.2,
        slow_query_ms: int = 500,
    ) -> None:
        super().__init__(session_factory, slow_query_ms=slow_query_ms)
        self.similarity_threshold = similarity_threshold
        self.search = with_fallback(self.search_trigram, self.search_like, self.entity)

    @traced("search.users.trigram", attributes={"entity": "users", "mode": "trigram"})
    async def search_trigram(self, params: EntitySearchParams) -> SearchPage[UserHit]:
        """Users whose similarity passes the threshold or whose name/bio contains the text."""
        similarity = trigram_similarity(User.name, User.bio, params.query).label("similarity")
        match = or_(
            similarity >= self.similarity_threshold,
            ilike_any(params.query, User.name, User.bio),
        )
        async with self.session_factory() as session:
            rows, total = await self._fetch_page(
                session,
                mode=SearchMode.TRIGRAM,
                columns=(*_USER_COLUMNS, similarity),
                filters=user_filters(match),
                order_by=[similarity.desc(), User.created_at.desc(), User.id.desc()],
                params=params,
            )
        items = [
            self._to_hit(row, rank=float(row["similarity"]), similarity=float(row["similarity"]))
            for row in rows
        ]
        return SearchPage(items=items, total=total)

    @traced("search.users.like", attributes={"entity": "users", "mode": "like"})
    async def search_like(self, params: EntitySearchParams) -> SearchPage[UserHit]:
        async with self.session_factory() as session:
            rows, total = await self._fetch_page(
                session,
                mode=SearchMode.LIKE,
                columns=_USER_COLUMNS,
                filters=user_filters(ilike_any(params.query, User.name, User.bio)),
                order_by=[User.name.asc().nulls_last(), User.id.desc()],
                params=params,
            )
        items = [
            self._to_hit(row, rank=ordinal_rank(params.offset, i), similarity=0.0)
            for i, row in enumerate(rows)
        ]
        return SearchPage(items=items, total=total)

    @staticmethod
    def _to_hit(row: RowMapping, *, rank: float, similarity: float) -> UserHit:
        return UserHit(
            id=row["id"],
            name=row["name"],
            avatar_url=row["avatar_url"],
            bio=row["bio"],
            created_at=row["created_at"],
            rank=rank,
            similarity=similarity,
        )
