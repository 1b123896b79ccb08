"""Middleware: request ID injection, conditional GET."""

import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Headers a 304 must repeat from the full response (RFC 9110 15.4.5).
_NOT_MODIFIED_HEADERS = ("ETag", "Cache-Control", "Vary", "X-Request-ID")


def etag_matches(if_none_match: str, etag: str) -> bool:
    """True if an If-None-Match header value lists ``etag`` (weak comparison)."""
    if if_none_match.strip() == "*":
        return True
    wanted = etag.removeprefix("W/").strip('"')
    for candidate in if_none_match.split(","):
        tag = candidate.strip().removeprefix("W/").strip('"')
        if tag == wanted:
            return True
    return False


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Add a unique X-Request-ID header to every request/response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class ConditionalGetMiddleware(BaseHTTPMiddleware):
    """Answer 304 Not Modified when If-None-Match matches the response ETag.

    Only successful GET responses that already carry an ETag are considered;
    the endpoint still computes the body, the client just doesn't download it.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)

        if_none_match = request.headers.get("If-None-Match")
        etag = response.headers.get("ETag")
        if (
            request.method != "GET"
            or response.status_code != 200
            or not if_none_match
            or not etag
            or not etag_matches(if_none_match, etag)
        ):
            return response

        # Drain the inner response so it finishes sending (and runs its background tasks).
        async for _ in response.body_iterator:
            pass

        headers = {
            name: response.headers[name]
            for name in _NOT_MODIFIED_HEADERS
            if name in response.headers
        }
        return Response(status_code=304, headers=headers)
