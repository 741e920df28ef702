"""Tag search: substring match on name and description, most used tags first."""

from __future__ import annotations

from app.application.dtos.search import EntitySearchParams, SearchPage, TagHit
from app.domain.enums import SearchMode
from app.infrastructure.persistence.models import Tag
from app.infrastructure.persistence.repositories.search.base import BaseSearchRepository
from app.infrastructure.persistence.repositories.search.filters import ilike_any
from app.infrastructure.persistence.repositories.search.rank import ordinal_rank
from app.shared.telemetry.tracing import traced

_TAG_COLUMNS = (
    Tag.id,
    Tag.name,
    Tag.slug,
    Tag.description,
    Tag.color,
    Tag.posts_count,
    Tag.created_at,
)


class TagSearchRepository(BaseSearchRepository[TagHit]):
    """Single-mode tag search. There is no fallback; ILIKE needs no extension."""

    entity = "tags"
    model = Tag

    @traced("search.tags.like", attributes={"entity": "tags", "mode": "like"})
    async def search(self, params: EntitySearchParams) -> SearchPage[TagHit]:
        async with self.session_factory() as session:
            rows, total = await self._fetch_page(
                session,
                mode=SearchMode.LIKE,
                columns=_TAG_COLUMNS,
                filters=[ilike_any(params.query, Tag.name, Tag.description)],
                order_by=[Tag.posts_count.desc(), Tag.name.asc(), Tag.id.desc()],
                params=params,
            )
        items = [
            TagHit(
                id=row["id"],
                name=row["name"],
                slug=row["slug"],
                description=row["description"],
                color=row["color"],
                posts_count=int(row["posts_count"]),
                created_at=row["created_at"],
                rank=ordinal_rank(params.offset, i),
            )
            for i, row in enumerate(rows)
        ]
        return SearchPage(items=items, total=total)
