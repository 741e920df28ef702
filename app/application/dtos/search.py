"""DTOs for unified search (no dependency on ORM).

Raw request input, the normalized query, per-entity hits and the
paginated buckets assembled into the unified result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Generic, TypeVar

from app.domain.enums import SearchSort, SearchType

T = TypeVar("T")


@dataclass(frozen=True)
class RawSearchParams:
    """Search input as received from the route layer (unvalidated).

    Numeric fields may be strings from the query string, floats or ints;
    the normalizer coerces and clamps them.
    """

    q: str | None = None
    type: SearchType | str | None = None
    page: int | float | str | None = None
    limit: int | float | str | None = None
    sort: SearchSort | str | None = None
    author_id: str | None = None
    tag_ids: list[str] | str | None = None
    date_from: datetime | date | str | None = None
    date_to: datetime | date | str | None = None
    only_published: bool | str | None = None


@dataclass(frozen=True)
class SearchQuery:
    """Validated and clamped search request."""

    text: str
    type: SearchType = SearchType.ALL
    page: int = 1
    limit: int = 10
    sort: SearchSort = SearchSort.RELEVANCE
    author_id: str | None = None
    tag_ids: tuple[str, ...] = ()
    date_from: datetime | None = None
    date_to: datetime | None = None
    only_published: bool = True

    @property
    def offset(self) -> int:
        """Row offset of the requested page."""
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class EntitySearchParams:
    """Input of one entity executor (already normalized)."""

    query: str
    limit: int
    offset: int = 0
    sort: SearchSort = SearchSort.RELEVANCE
    author_id: str | None = None
    tag_ids: tuple[str, ...] = ()
    date_from: datetime | None = None
    date_to: datetime | None = None
    only_published: bool = True

    def as_log_context(self) -> dict[str, Any]:
        """Params as a flat dict for structured log messages."""
        return {
            "query": self.query,
            "limit": self.limit,
            "offset": self.offset,
            "sort": self.sort.value,
            "author_id": self.author_id,
            "tag_ids": list(self.tag_ids),
            "date_from": self.date_from.isoformat() if self.date_from else None,
            "date_to": self.date_to.isoformat() if self.date_to else None,
            "only_published": self.only_published,
        }


@dataclass(frozen=True)
class AuthorSummary:
    """Author reference attached to post and activity hits."""

    id: str
    name: str | None = None
    avatar_url: str | None = None


@dataclass(frozen=True)
class TagSummary:
    """Tag reference attached to post hits."""

    id: str
    name: str
    slug: str
    color: str | None = None


@dataclass(frozen=True)
class PostHit:
    id: str
    slug: str
    title: str
    excerpt: str | None
    cover_image: str | None
    published: bool
    published_at: datetime | None
    created_at: datetime
    rank: float
    author: AuthorSummary
    tags: list[TagSummary] = field(default_factory=list)


@dataclass(frozen=True)
class ActivityHit:
    id: str
    content: str
    image_urls: list[str]
    created_at: datetime
    rank: float
    author: AuthorSummary


@dataclass(frozen=True)
class UserHit:
    """Matched user. similarity is 0 when the substring fallback produced the hit."""

    id: str
    name: str | None
    avatar_url: str | None
    bio: str | None
    created_at: datetime
    rank: float
    similarity: float = 0.0


@dataclass(frozen=True)
class TagHit:
    id: str
    name: str
    slug: str
    description: str | None
    color: str | None
    posts_count: int
    created_at: datetime
    rank: float


@dataclass(frozen=True)
class SearchPage(Generic[T]):
    """Executor output: one page of hits plus the size of the full match set."""

    items: list[T]
    total: int

    @classmethod
    def empty(cls) -> SearchPage[T]:
        return cls(items=[], total=0)


@dataclass(frozen=True)
class SearchBucket(Generic[T]):
    """One entity's paginated slice of the unified response."""

    items: list[T]
    total: int
    page: int
    limit: int
    has_more: bool

    @classmethod
    def from_page(cls, result: SearchPage[T], page: int, limit: int) -> SearchBucket[T]:
        """Build a bucket; has_more compares the full total against page * limit."""
        return cls(
            items=result.items,
            total=result.total,
            page=page,
            limit=limit,
            has_more=result.total > page * limit,
        )


@dataclass(frozen=True)
class UnifiedSearchResult:
    """Merged response. overall_total is the sum of all four bucket totals."""

    query: str
    type: SearchType
    page: int
    limit: int
    overall_total: int
    posts: SearchBucket[PostHit]
    activities: SearchBucket[ActivityHit]
    users: SearchBucket[UserHit]
    tags: SearchBucket[TagHit]


@dataclass(frozen=True)
class PostSuggestions:
    """Typeahead result: top posts by relevance, without tags."""

    query: str
    items: list[PostHit]
    total: int
