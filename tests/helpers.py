"""Test doubles and hit builders shared by the unit and API tests."""

from datetime import UTC, datetime
from typing import Any

from app.application.dtos.search import (
    ActivityHit,
    AuthorSummary,
    PostHit,
    SearchPage,
    TagHit,
    UserHit,
)

NOW = datetime(2026, 1, 15, 12, 0, 0, tzinfo=UTC)


class FakeResult:
    """Stands in for a SQLAlchemy Result: .mappings().all() returns dict rows."""

    def __init__(self, rows: list[dict[str, Any]]) -> None:
        self._rows = rows

    def mappings(self) -> "FakeResult":
        return self

    def all(self) -> list[dict[str, Any]]:
        return self._rows


class FakeSession:
    """Async session double: execute() pops queued row lists, scalar() returns a count."""

    def __init__(
        self,
        *results: list[dict[str, Any]],
        scalar: int | None = None,
        error: Exception | None = None,
    ) -> None:
        self.results = list(results)
        self.scalar_value = scalar
        self.error = error
        self.statements: list[Any] = []
        self.scalar_calls = 0

    async def execute(self, stmt: Any) -> FakeResult:
        self.statements.append(stmt)
        if self.error is not None:
            raise self.error
        return FakeResult(self.results.pop(0) if self.results else [])

    async def scalar(self, stmt: Any) -> int | None:
        self.statements.append(stmt)
        self.scalar_calls += 1
        return self.scalar_value

    async def __aenter__(self) -> "FakeSession":
        return self

    async def __aexit__(self, *exc: Any) -> bool:
        return False


def make_post(i: int = 1, **overrides: Any) -> PostHit:
    values: dict[str, Any] = {
        "id": f"post-{i}",
        "slug": f"post-{i}",
        "title": f"React post {i}",
        "excerpt": None,
        "cover_image": None,
        "published": True,
        "published_at": NOW,
        "created_at": NOW,
        "rank": 0.5,
        "author": AuthorSummary(id="author-1", name="Ada"),
    }
    values.update(overrides)
    return PostHit(**values)


def make_activity(i: int = 1) -> ActivityHit:
    return ActivityHit(
        id=f"act-{i}",
        content="learning react",
        image_urls=[],
        created_at=NOW,
        rank=0.3,
        author=AuthorSummary(id="author-1"),
    )


def make_user(i: int = 1, avatar_url: str | None = None) -> UserHit:
    return UserHit(
        id=f"user-{i}",
        name=f"Reacty {i}",
        avatar_url=avatar_url,
        bio=None,
        created_at=NOW,
        rank=0.4,
        similarity=0.4,
    )


def make_tag(i: int = 1) -> TagHit:
    return TagHit(
        id=f"tag-{i}",
        name="react",
        slug="react",
        description=None,
        color="#61dafb",
        posts_count=12,
        created_at=NOW,
        rank=1.0,
    )


def page_of(items: list[Any], total: int | None = None) -> SearchPage[Any]:
    return SearchPage(items=items, total=len(items) if total is None else total)
