import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1 import api_router
from app.config import settings
from app.core.error_handlers import register_error_handlers
from app.core.middleware import ConditionalGetMiddleware, RequestIDMiddleware

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("%s %s starting", settings.APP_NAME, settings.APP_VERSION)
    yield
    # Shutdown: cleanup connections
    from app.database import engine

    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/api/docs",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# --- Middleware (last added runs outermost) ---

# Request ID injection
app.add_middleware(RequestIDMiddleware)

# 304 for unchanged statistics payloads
app.add_middleware(ConditionalGetMiddleware)

# CORS - tighten in production via CORS_ORIGINS env var
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "If-None-Match", "X-Request-ID"],
    expose_headers=["ETag", "X-Request-ID"],
)

# --- Error handlers ---
register_error_handlers(app)

# --- Routes ---
app.include_router(api_router)


@app.get("/api/health")
async def health_check():
    """Deep health check: verifies DB and Redis connectivity."""
    import time

    checks: dict = {"version": settings.APP_VERSION}
    healthy = True

    # Database check
    start = time.monotonic()
    try:
        from sqlalchemy import text

        from app.database import async_session_factory

        async with async_session_factory() as session:
            await session.execute(text("SELECT 1"))
        checks["database"] = {"status": "ok", "latency_ms": round((time.monotonic() - start) * 1000, 1)}
    except Exception as exc:
        healthy = False
        checks["database"] = {"status": "error", "detail": str(exc)[:200]}

    # Redis is only a settings cache; report it but don't fail on it
    if settings.REDIS_URL:
        start = time.monotonic()
        try:
            import redis.asyncio as aioredis

            r = aioredis.from_url(settings.REDIS_URL, socket_connect_timeout=3)
            await r.ping()
            await r.aclose()
            checks["redis"] = {"status": "ok", "latency_ms": round((time.monotonic() - start) * 1000, 1)}
        except Exception as exc:
            checks["redis"] = {"status": "error", "detail": str(exc)[:200]}
    else:
        checks["redis"] = {"status": "disabled"}

    checks["status"] = "healthy" if healthy else "degraded"

    from fastapi.responses import JSONResponse

    status_code = 200 if healthy else 503
    return JSONResponse(content=checks, status_code=status_code)
