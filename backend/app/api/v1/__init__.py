"""API v1 router that aggregates all sub-routers."""

from fastapi import APIRouter

from app.api.v1.statistics import router as statistics_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(statistics_router)
