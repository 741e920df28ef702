"""Raw ASGI middleware: request id sanitization and request timeout."""

import asyncio
import json

from app.middleware.request_id import sanitize_request_id
from app.middleware.timeout import TimeoutMiddleware


def test_valid_request_id_is_kept() -> None:
    assert sanitize_request_id(" abc-123_X ") == "abc-123_X"


def test_unsafe_request_id_is_replaced() -> None:
    """Newlines (log injection) and oversized values get a fresh UUID."""
    for raw in (None, "", "bad\nid", "x" * 65):
        replaced = sanitize_request_id(raw)
        assert replaced != raw
        assert len(replaced) == 36


async def test_slow_request_gets_504() -> None:
    async def slow_app(scope, receive, send) -> None:
        await asyncio.sleep(1)

    sent: list[dict] = []

    async def send(message: dict) -> None:
        sent.append(message)

    app = TimeoutMiddleware(slow_app, timeout_seconds=0)
    await app({"type": "http", "method": "GET", "path": "/api/v1/search"}, None, send)
    assert sent[0]["status"] == 504
    assert json.loads(sent[1]["body"])["code"] == "GATEWAY_TIMEOUT"
