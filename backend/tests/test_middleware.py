"""Tests for If-None-Match parsing and the conditional GET middleware."""
import pytest
from httpx import ASGITransport, AsyncClient
from starlette.applications import Starlette
from starlette.responses import StreamingResponse
from starlette.routing import Route

from app.core.middleware import ConditionalGetMiddleware, etag_matches


@pytest.mark.parametrize("header", [
    "abc123",
    '"abc123"',
    'W/"abc123"',
    '"zzz", "abc123"',
    "*",
])
def test_etag_matches(header):
    assert etag_matches(header, "abc123")


@pytest.mark.parametrize("header", [
    '"abc124"',
    '"abc"',
    "",
])
def test_etag_does_not_match(header):
    assert not etag_matches(header, "abc123")


@pytest.mark.asyncio
async def test_not_modified_finishes_inner_response():
    state = {"finished": False}

    async def body():
        yield b'{"ok":'
        yield b"true}"
        state["finished"] = True

    async def endpoint(request):
        return StreamingResponse(
            body(),
            media_type="application/json",
            headers={"ETag": "abc123", "Cache-Control": "private, max-age=0"},
        )

    app = Starlette(routes=[Route("/", endpoint)])
    app.add_middleware(ConditionalGetMiddleware)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        r = await client.get("/", headers={"If-None-Match": '"abc123"'})

    assert r.status_code == 304
    assert r.content == b""
    assert r.headers["ETag"] == "abc123"
    assert r.headers["Cache-Control"] == "private, max-age=0"
    assert state["finished"] is True
