"""Recruitment statistics endpoint for the dashboard progress-bar widgets."""

import hashlib
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.error_handlers import method_not_allowed_response
from app.database import get_db
from app.schemas import ErrorResponse
from app.services.recruitment import RecruitmentStatisticsService

router = APIRouter(prefix="/statistics", tags=["statistics"])

UNSUPPORTED_METHODS = ["POST", "PUT", "PATCH", "DELETE"]


class RecruitmentStatisticsEndpoint:
    """Per-request handler. The rendered response is computed at most once,
    so the body and its ETag always come from the same payload."""

    allowed_methods = ("GET",)

    def __init__(self, service: RecruitmentStatisticsService):
        self.service = service
        self._response: JSONResponse | None = None

    async def handle(self, request: Request) -> Response:
        if request.method not in self.allowed_methods:
            return method_not_allowed_response(request.method, self.allowed_methods)
        response = await self.compute_statistics()
        response.headers["ETag"] = await self.compute_etag(request)
        return response

    async def compute_statistics(self) -> JSONResponse:
        if self._response is None:
            payload = await self.service.build_payload()
            self._response = JSONResponse(
                content=payload.to_json(),
                headers={
                    "Cache-Control": f"private, max-age={settings.STATISTICS_CACHE_MAX_AGE_SECONDS}",
                },
            )
        return self._response

    async def compute_etag(self, request: Request) -> str:
        response = await self.compute_statistics()
        return hashlib.md5(response.body).hexdigest()


def get_recruitment_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> RecruitmentStatisticsService:
    return RecruitmentStatisticsService(db)


@router.get(
    "/recruitment",
    response_model=None,
    responses={500: {"model": ErrorResponse}},
)
@router.api_route(
    "/recruitment",
    methods=UNSUPPORTED_METHODS,
    response_model=None,
    include_in_schema=False,
)
async def get_recruitment_statistics(
    request: Request,
    service: Annotated[RecruitmentStatisticsService, Depends(get_recruitment_service)],
) -> Response:
    """Overall and per-project recruitment against targets, split by sex."""
    endpoint = RecruitmentStatisticsEndpoint(service)
    return await endpoint.handle(request)
