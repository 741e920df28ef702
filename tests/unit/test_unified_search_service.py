"""UnifiedSearchService unit tests with mocked entity searches and URL signer."""

from unittest.mock import AsyncMock

import pytest

from app.application.dtos.search import RawSearchParams, SearchPage
from app.application.use_cases.search import UnifiedSearchService
from app.domain.enums import SearchType
from app.domain.exceptions import SearchUnavailableException, ValidationException
from tests.helpers import make_activity, make_post, make_tag, make_user, page_of


def _executor(page: SearchPage) -> AsyncMock:
    executor = AsyncMock()
    executor.search = AsyncMock(return_value=page)
    return executor


@pytest.fixture
def executors():
    """Posts 12 total, activities 3, users 2, tags 1."""
    return {
        "posts": _executor(page_of([make_post(i) for i in range(10)], total=12)),
        "activities": _executor(page_of([make_activity(i) for i in range(3)])),
        "users": _executor(page_of([make_user(1), make_user(2)])),
        "tags": _executor(page_of([make_tag(1)])),
    }


@pytest.fixture
def signer() -> AsyncMock:
    signer = AsyncMock()
    signer.sign_many = AsyncMock(side_effect=lambda refs: {r: f"https://cdn/{r}" for r in refs})
    return signer


@pytest.fixture
def service(executors, signer) -> UnifiedSearchService:
    return UnifiedSearchService(
        posts=executors["posts"],
        activities=executors["activities"],
        users=executors["users"],
        tags=executors["tags"],
        url_signer=signer,
    )


async def test_all_type_returns_every_bucket(service, executors) -> None:
    """q=react, type=all, limit=10: posts page has 10 of 12 and more to load."""
    result = await service.search(RawSearchParams(q="react", type="all", limit=10))
    assert result.type is SearchType.ALL
    assert len(result.posts.items) == 10
    assert result.posts.total == 12
    assert result.posts.has_more is True
    assert result.activities.has_more is False
    assert result.overall_total == 12 + 3 + 2 + 1
    for executor in executors.values():
        params = executor.search.await_args.args[0]
        assert params.limit == 10
        assert params.offset == 0


async def test_single_type_counts_other_entities(service, executors) -> None:
    """type=users: other buckets are empty but still report totals; they run with limit=1."""
    result = await service.search(RawSearchParams(q="react", type="users", page=2, limit=5))
    assert result.users.items
    assert result.posts.items == []
    assert result.posts.total == 12
    assert result.tags.items == []
    assert result.overall_total == 18
    users_params = executors["users"].search.await_args.args[0]
    assert (users_params.limit, users_params.offset) == (5, 5)
    for name in ("posts", "activities", "tags"):
        params = executors[name].search.await_args.args[0]
        assert (params.limit, params.offset) == (1, 0)


async def test_every_bucket_uses_request_page_and_limit(service) -> None:
    result = await service.search(RawSearchParams(q="react", type="tags", page=3, limit=4))
    for bucket in (result.posts, result.activities, result.users, result.tags):
        assert bucket.page == 3
        assert bucket.limit == 4


async def test_has_more_boundary(service, executors) -> None:
    """total == page * limit means no more pages."""
    executors["posts"].search.return_value = page_of([make_post(i) for i in range(2)], total=12)
    result = await service.search(RawSearchParams(q="react", type="posts", page=2, limit=6))
    assert result.posts.has_more is False
    result = await service.search(RawSearchParams(q="react", type="posts", page=1, limit=6))
    assert result.posts.has_more is True


async def test_has_more_when_one_row_remains(service, executors) -> None:
    """total=13, page=2, limit=6: one row is left for page 3."""
    executors["posts"].search.return_value = page_of([make_post(i) for i in range(6)], total=13)
    result = await service.search(RawSearchParams(q="react", type="posts", page=2, limit=6))
    assert result.posts.has_more is True


async def test_invalid_query_issues_no_search(service, executors, signer) -> None:
    with pytest.raises(ValidationException):
        await service.search(RawSearchParams(q="a;b"))
    for executor in executors.values():
        executor.search.assert_not_called()
    signer.sign_many.assert_not_called()


async def test_no_matches_gives_empty_buckets(service, executors) -> None:
    for executor in executors.values():
        executor.search.return_value = SearchPage.empty()
    result = await service.search(RawSearchParams(q="zzzz"))
    assert result.overall_total == 0
    assert result.users.items == []
    assert result.users.has_more is False


async def test_executor_failure_raises_unavailable(service, executors) -> None:
    executors["activities"].search.side_effect = ConnectionError("db down")
    with pytest.raises(SearchUnavailableException) as exc_info:
        await service.search(RawSearchParams(q="react"))
    assert exc_info.value.error_code == "SEARCH_UNAVAILABLE"
    assert exc_info.value.details["entity"] == "activities"
    assert exc_info.value.details == {"entity": "activities"}
    assert "db down" not in exc_info.value.message
    assert isinstance(exc_info.value.__cause__, ConnectionError)


async def test_drafts_hidden_unless_viewer_may_see_them(service, executors) -> None:
    await service.search(RawSearchParams(q="react", only_published="false"))
    assert executors["posts"].search.await_args.args[0].only_published is True
    await service.search(RawSearchParams(q="react", only_published="false"), can_view_drafts=True)
    assert executors["posts"].search.await_args.args[0].only_published is False


async def test_avatars_signed_in_one_call(service, executors, signer) -> None:
    """Duplicate refs are signed once; users without avatars are untouched."""
    executors["users"].search.return_value = page_of(
        [make_user(1, "avatars/a.png"), make_user(2, "avatars/a.png"), make_user(3)]
    )
    result = await service.search(RawSearchParams(q="react", type="users"))
    signer.sign_many.assert_awaited_once_with(["avatars/a.png"])
    assert [u.avatar_url for u in result.users.items] == [
        "https://cdn/avatars/a.png",
        "https://cdn/avatars/a.png",
        None,
    ]


async def test_signer_skipped_without_avatars(service, signer) -> None:
    await service.search(RawSearchParams(q="react"))
    signer.sign_many.assert_not_called()


async def test_control_characters_issue_no_search(service, executors) -> None:
    with pytest.raises(ValidationException):
        await service.search(RawSearchParams(q="re\x00act"))
    for executor in executors.values():
        executor.search.assert_not_called()


async def test_huge_page_reaches_executors_with_bounded_offset(service, executors) -> None:
    result = await service.search(RawSearchParams(q="react", type="posts", page="1e18", limit=10))
    assert result.page == 100_000
    assert executors["posts"].search.await_args.args[0].offset == 999_990
    assert executors["users"].search.await_args.args[0].offset == 0


async def test_suggest_uses_post_text_search_only(service, executors) -> None:
    executors["posts"].suggest = AsyncMock(return_value=page_of([make_post(1)], total=4))
    result = await service.suggest(RawSearchParams(q="react", only_published="false"))
    assert result.query == "react"
    assert result.total == 4
    assert [p.id for p in result.items] == ["post-1"]
    params = executors["posts"].suggest.await_args.args[0]
    assert (params.limit, params.offset, params.only_published) == (5, 0, True)
    for executor in executors.values():
        executor.search.assert_not_called()


async def test_suggest_admin_may_include_drafts(service, executors) -> None:
    executors["posts"].suggest = AsyncMock(return_value=SearchPage.empty())
    await service.suggest(
        RawSearchParams(q="react", only_published="false", limit=3), can_view_drafts=True
    )
    params = executors["posts"].suggest.await_args.args[0]
    assert (params.limit, params.only_published) == (3, False)


async def test_suggest_short_query_skips_datastore(service, executors) -> None:
    executors["posts"].suggest = AsyncMock()
    result = await service.suggest(RawSearchParams(q="r"))
    assert (result.items, result.total) == ([], 0)
    executors["posts"].suggest.assert_not_called()


async def test_suggest_failure_raises_unavailable(service, executors) -> None:
    executors["posts"].suggest = AsyncMock(side_effect=OSError("socket closed"))
    with pytest.raises(SearchUnavailableException) as exc_info:
        await service.suggest(RawSearchParams(q="react"))
    assert exc_info.value.details == {"entity": "posts"}
