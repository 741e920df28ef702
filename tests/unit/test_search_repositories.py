"""Entity search repositories against a fake async session (no Postgres)."""

from unittest.mock import patch

import pytest

from app.application.dtos.search import AuthorSummary, EntitySearchParams
from app.domain.enums import SearchSort
from app.infrastructure.persistence.repositories.search import base as base_module
from app.infrastructure.persistence.repositories.search import fallback as fallback_module
from app.infrastructure.persistence.repositories.search.activities import (
    ActivitySearchRepository,
)
from app.infrastructure.persistence.repositories.search.posts import PostSearchRepository
from app.infrastructure.persistence.repositories.search.tags import TagSearchRepository
from app.infrastructure.persistence.repositories.search.users import UserSearchRepository
from tests.helpers import NOW, FakeSession


def _post_row(i: int, total: int, author_id: str = "u1", **extra) -> dict:
    return {
        "id": f"p{i}",
        "slug": f"p{i}",
        "title": f"Post {i}",
        "excerpt": None,
        "cover_image": None,
        "published": True,
        "published_at": NOW,
        "created_at": NOW,
        "author_id": author_id,
        "_total": total,
        **extra,
    }


def _user_row(i: int, total: int, **extra) -> dict:
    return {
        "id": f"u{i}",
        "name": f"Reacty {i}",
        "avatar_url": None,
        "bio": None,
        "created_at": NOW,
        "_total": total,
        **extra,
    }


AUTHOR_ROWS = [{"id": "u1", "name": "Ada", "avatar_url": "avatars/ada.png"}]


async def test_post_ts_page_uses_window_total(session_factory) -> None:
    """Total comes from the page query; no separate COUNT is issued."""
    session = FakeSession(
        [_post_row(1, 12, rank=0.8), _post_row(2, 12, rank=0.4)],
        AUTHOR_ROWS,
        [{"post_id": "p1", "id": "t1", "name": "react", "slug": "react", "color": None}],
    )
    repo = PostSearchRepository(session_factory(session))
    page = await repo.search(EntitySearchParams(query="react", limit=2))
    assert page.total == 12
    assert [hit.rank for hit in page.items] == [0.8, 0.4]
    assert page.items[0].author == AuthorSummary(id="u1", name="Ada", avatar_url="avatars/ada.png")
    assert [t.slug for t in page.items[0].tags] == ["react"]
    assert page.items[1].tags == []
    assert session.scalar_calls == 0


async def test_empty_page_past_first_row_counts_separately(session_factory) -> None:
    session = FakeSession([], scalar=7)
    repo = PostSearchRepository(session_factory(session))
    page = await repo.search(EntitySearchParams(query="react", limit=10, offset=20))
    assert page.items == []
    assert page.total == 7
    assert session.scalar_calls == 1


async def test_empty_first_page_has_zero_total(session_factory) -> None:
    session = FakeSession([])
    repo = TagSearchRepository(session_factory(session))
    page = await repo.search(EntitySearchParams(query="zzz", limit=10))
    assert page.total == 0
    assert session.scalar_calls == 0


async def test_missing_author_keeps_id_only(session_factory) -> None:
    session = FakeSession(
        [{"id": "a1", "content": "react", "image_urls": None, "created_at": NOW,
          "author_id": "ghost", "rank": 0.2, "_total": 1}],
        [],
    )
    repo = ActivitySearchRepository(session_factory(session))
    page = await repo.search(EntitySearchParams(query="react", limit=10))
    assert page.items[0].author == AuthorSummary(id="ghost")
    assert page.items[0].image_urls == []


async def test_post_fallback_uses_ordinal_ranks(session_factory) -> None:
    """Full-text failure runs substring mode in a fresh session; ranks are 1-based positions."""
    failing = FakeSession(error=RuntimeError("text search configuration missing"))
    like = FakeSession([_post_row(1, 30), _post_row(2, 30)], AUTHOR_ROWS, [])
    repo = PostSearchRepository(session_factory(failing, like))
    with patch.object(fallback_module, "record_search_fallback") as record:
        page = await repo.search(EntitySearchParams(query="react", limit=10, offset=10))
    record.assert_called_once_with("posts")
    assert page.total == 30
    assert [hit.rank for hit in page.items] == [11.0, 12.0]


async def test_user_trigram_similarity(session_factory) -> None:
    session = FakeSession([_user_row(1, 1, similarity=0.6)])
    repo = UserSearchRepository(session_factory(session))
    page = await repo.search(EntitySearchParams(query="reacty", limit=10))
    assert page.items[0].similarity == 0.6
    assert page.items[0].rank == 0.6


async def test_user_like_fallback_has_zero_similarity(session_factory) -> None:
    """Without pg_trgm similarity() fails; the substring hits report similarity 0."""
    failing = FakeSession(error=RuntimeError("function similarity(text, text) does not exist"))
    like = FakeSession([_user_row(1, 2), _user_row(2, 2)])
    repo = UserSearchRepository(session_factory(failing, like))
    with patch.object(fallback_module, "record_search_fallback"):
        page = await repo.search(EntitySearchParams(query="react", limit=10))
    assert [u.similarity for u in page.items] == [0.0, 0.0]
    assert [u.rank for u in page.items] == [1.0, 2.0]


async def test_tag_hits(session_factory) -> None:
    session = FakeSession(
        [{"id": "t1", "name": "react", "slug": "react", "description": None, "color": None,
          "posts_count": 12, "created_at": NOW, "_total": 1}]
    )
    repo = TagSearchRepository(session_factory(session))
    page = await repo.search(EntitySearchParams(query="rea", limit=5, sort=SearchSort.LATEST))
    assert page.items[0].posts_count == 12
    assert page.items[0].rank == 1.0


async def test_slow_query_is_recorded(session_factory) -> None:
    session = FakeSession([])
    repo = TagSearchRepository(session_factory(session), slow_query_ms=0)
    with patch.object(base_module, "record_slow_query") as record:
        await repo.search(EntitySearchParams(query="react", limit=10))
    record.assert_called_once_with("tags", "like")


async def test_post_suggest_skips_tag_loading(session_factory) -> None:
    """Suggestions run the page query and the author lookup only."""
    session = FakeSession([_post_row(1, 3, rank=0.9)], AUTHOR_ROWS)
    repo = PostSearchRepository(session_factory(session))
    page = await repo.suggest(
        EntitySearchParams(query="react", limit=5, offset=40, sort=SearchSort.LATEST)
    )
    assert page.total == 3
    assert page.items[0].tags == []
    assert page.items[0].rank == 0.9
    assert len(session.statements) == 2


async def test_post_suggest_has_no_substring_fallback(session_factory) -> None:
    failing = FakeSession(error=RuntimeError("text search configuration missing"))
    repo = PostSearchRepository(session_factory(failing))
    with patch.object(fallback_module, "record_search_fallback") as record:
        with pytest.raises(RuntimeError, match="text search"):
            await repo.suggest(EntitySearchParams(query="react", limit=5))
    record.assert_not_called()
