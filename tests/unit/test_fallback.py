"""with_fallback: primary/fallback degradation for entity searches."""

from unittest.mock import AsyncMock, patch

import pytest

from app.application.dtos.search import EntitySearchParams, SearchPage
from app.infrastructure.persistence.repositories.search import fallback as fallback_module
from app.infrastructure.persistence.repositories.search.fallback import with_fallback

PARAMS = EntitySearchParams(query="react", limit=10)


async def test_primary_success_skips_fallback() -> None:
    primary = AsyncMock(return_value=SearchPage(items=["p"], total=1))
    fallback = AsyncMock()
    search = with_fallback(primary, fallback, "posts")
    with patch.object(fallback_module, "record_search_fallback") as record:
        result = await search(PARAMS)
    assert result.items == ["p"]
    fallback.assert_not_called()
    record.assert_not_called()


async def test_primary_failure_runs_fallback_once(caplog: pytest.LogCaptureFixture) -> None:
    """One warning, one metric increment, result equals the fallback's output."""
    primary = AsyncMock(side_effect=RuntimeError("function similarity does not exist"))
    fallback = AsyncMock(return_value=SearchPage(items=["f"], total=3))
    search = with_fallback(primary, fallback, "users")
    with patch.object(fallback_module, "record_search_fallback") as record:
        result = await search(PARAMS)
    assert result == SearchPage(items=["f"], total=3)
    primary.assert_awaited_once_with(PARAMS)
    fallback.assert_awaited_once_with(PARAMS)
    record.assert_called_once_with("users")
    warnings = [r for r in caplog.records if "using fallback" in r.getMessage()]
    assert len(warnings) == 1
    assert "users" in warnings[0].getMessage()


async def test_fallback_error_propagates() -> None:
    primary = AsyncMock(side_effect=RuntimeError("primary"))
    fallback = AsyncMock(side_effect=ConnectionError("db down"))
    search = with_fallback(primary, fallback, "activities")
    with patch.object(fallback_module, "record_search_fallback") as record:
        with pytest.raises(ConnectionError, match="db down"):
            await search(PARAMS)
    record.assert_called_once_with("activities")
