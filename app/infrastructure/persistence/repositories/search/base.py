"""Shared machinery for entity search repositories.

Each search mode opens its own session from the factory, runs one
statement that returns the page together with count(*) OVER () and, only
when the page is empty past the first row, a plain COUNT(*) so the total
always reflects the full match set.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import RowMapping, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql.elements import ColumnElement

from app.application.dtos.search import AuthorSummary, EntitySearchParams
from app.domain.enums import SearchMode
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models import User
from app.shared.telemetry.metrics import record_slow_query

logger = logging.getLogger(__name__)

T = TypeVar("T")

TOTAL_COLUMN = "_total"


class BaseSearchRepository(Generic[T]):
    """Base for per-entity search. Subclasses set entity and model."""

    entity: str
    model: type[Base]

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        slow_query_ms: int = 500,
    ) -> None:
        self.session_factory = session_factory
        self.slow_query_ms = slow_query_ms

    async def _fetch_page(
        self,
        session: AsyncSession,
        *,
        mode: SearchMode,
        columns: Sequence[Any],
        filters: Sequence[ColumnElement],
        order_by: Sequence[Any],
        params: EntitySearchParams,
    ) -> tuple[Sequence[RowMapping], int]:
        """Run the ranked page query and resolve the total match count."""
        stmt = (
            select(*columns, func.count().over().label(TOTAL_COLUMN))
            .where(*filters)
            .order_by(*order_by)
            .limit(params.limit)
            .offset(params.offset)
        )
        started = time.perf_counter()
        rows = (await session.execute(stmt)).mappings().all()
        if rows:
            total = int(rows[0][TOTAL_COLUMN])
        elif params.offset > 0:
            count_stmt = select(func.count()).select_from(self.model).where(*filters)
            total = int(await session.scalar(count_stmt) or 0)
        else:
            total = 0
        self._observe(mode, started, params)
        return rows, total

    def _observe(self, mode: SearchMode, started: float, params: EntitySearchParams) -> None:
        """Log and count queries slower than the configured threshold."""
        elapsed_ms = (time.perf_counter() - started) * 1000
        if elapsed_ms < self.slow_query_ms:
            return
        logger.warning(
            "Slow %s search (%s mode): %.1f ms (params=%s)",
            self.entity,
            mode.value,
            elapsed_ms,
            params.as_log_context(),
        )
        record_slow_query(self.entity, mode.value)

    async def _load_authors(
        self, session: AsyncSession, author_ids: Iterable[str]
    ) -> dict[str, AuthorSummary]:
        """Batch-load author summaries for the distinct ids of one page."""
        ids = sorted(set(author_ids))
        if not ids:
            return {}
        stmt = select(User.id, User.name, User.avatar_url).where(User.id.in_(ids))
        rows = (await session.execute(stmt)).mappings().all()
        return {
            row["id"]: AuthorSummary(
                id=row["id"], name=row["name"], avatar_url=row["avatar_url"]
            )
            for row in rows
        }

    @staticmethod
    def _author_for(authors: dict[str, AuthorSummary], author_id: str) -> AuthorSummary:
        """Resolved author, or a summary with only the id when the row is missing."""
        return authors.get(author_id) or AuthorSummary(id=author_id)
