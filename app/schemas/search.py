"""Unified search API schemas (camelCase JSON)."""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.application.dtos.search import UnifiedSearchResult
from app.domain.enums import SearchType

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for response models: camelCase aliases, built from DTO attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class AuthorSummaryResponse(CamelModel):
    id: str
    name: str | None = None
    avatar_url: str | None = None


class TagSummaryResponse(CamelModel):
    id: str
    name: str
    slug: str
    color: str | None = None


class PostHitResponse(CamelModel):
    id: str
    slug: str
    title: str
    excerpt: str | None = None
    cover_image: str | None = None
    published: bool
    published_at: datetime | None = None
    created_at: datetime
    rank: float
    author: AuthorSummaryResponse
    tags: list[TagSummaryResponse] = Field(default_factory=list)


class ActivityHitResponse(CamelModel):
    id: str
    content: str
    image_urls: list[str] = Field(default_factory=list)
    created_at: datetime
    rank: float
    author: AuthorSummaryResponse


class UserHitResponse(CamelModel):
    id: str
    name: str | None = None
    avatar_url: str | None = None
    bio: str | None = None
    created_at: datetime
    rank: float
    similarity: float = 0.0


class TagHitResponse(CamelModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    color: str | None = None
    posts_count: int
    created_at: datetime
    rank: float


class SearchBucketResponse(CamelModel, Generic[T]):
    """One entity's slice. hasMore is true when total exceeds page * limit."""

    items: list[T]
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    has_more: bool


class UnifiedSearchResponse(CamelModel):
    """Response of GET /search. overallTotal is the sum of all four bucket totals."""

    query: str
    type: SearchType
    page: int
    limit: int
    overall_total: int
    posts: SearchBucketResponse[PostHitResponse]
    activities: SearchBucketResponse[ActivityHitResponse]
    users: SearchBucketResponse[UserHitResponse]
    tags: SearchBucketResponse[TagHitResponse]

    @classmethod
    def from_result(cls, result: UnifiedSearchResult) -> "UnifiedSearchResponse":
        return cls.model_validate(result)


class PostSuggestionsResponse(CamelModel):
    """Response of GET /search/suggestions. Post items carry an empty tags list."""

    query: str
    items: list[PostHitResponse]
    total: int = Field(..., ge=0)


class ErrorResponse(BaseModel):
    """Error body for 400/503/500 responses."""

    code: str = Field(..., description="Machine-readable error code, e.g. VALIDATION_ERROR")
    message: str
    details: dict = Field(default_factory=dict)
