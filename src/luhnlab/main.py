"""
Luhnlab - Swedish test data API

Application factory and ASGI entry point.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

import redis.asyncio as redis
from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from luhnlab import __version__
from luhnlab.api.deps import enforce_quota, get_plan_context
from luhnlab.api.routes import generate_router, mask_router, validate_router
from luhnlab.config import Settings, settings
from luhnlab.errors import LuhnLabError
from luhnlab.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from luhnlab.security.ratelimit import InMemoryQuotaStore, QuotaGate, QuotaStore, RedisQuotaStore
from luhnlab.swedish.address import get_postal_dataset

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

EXPOSED_HEADERS = [
    "X-Request-ID",
    "X-Process-Time",
    "X-RateLimit-Limit",
    "X-RateLimit-Remaining",
    "X-RateLimit-Reset",
    "Retry-After",
]


def build_quota_store(config: Settings) -> QuotaStore:
    """Quota counter store for the configured backend."""
    if config.quota_backend == "redis":
        client = redis.from_url(config.redis_url, encoding="utf-8", decode_responses=True)
        return RedisQuotaStore(client)
    return InMemoryQuotaStore()


def build_quota_gate(config: Settings) -> QuotaGate:
    return QuotaGate(
        build_quota_store(config),
        standard_window_seconds=config.standard_window_seconds,
        bulk_window_seconds=config.bulk_window_seconds,
        bulk_limit=config.bulk_window_limit,
        bulk_threshold=config.bulk_threshold,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load postal data and open the quota store; close the store on exit."""
    dataset = get_postal_dataset()
    logger.info(f"luhnlab {__version__}: {len(dataset.records)} localities from {dataset.source}")

    app.state.quota_gate = build_quota_gate(settings)
    logger.info(f"Quota backend: {settings.quota_backend}")
    try:
        yield
    finally:
        store = app.state.quota_gate.store
        if isinstance(store, RedisQuotaStore):
            await store.close()
        logger.info("luhnlab stopped")


def error_body(message: str, **extra: Any) -> dict[str, Any]:
    return {"error": True, "message": message, **extra}


async def luhnlab_error_handler(request: Request, exc: LuhnLabError) -> JSONResponse:
    """Render typed errors as {error, message}."""
    return JSONResponse(exc.to_dict(), status_code=exc.status_code, headers=exc.headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = jsonable_encoder(exc.errors())
    return JSONResponse(error_body("Ogiltig förfrågan.", details=details), status_code=400)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        error_body(str(exc.detail)),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    if settings.is_production:
        body = error_body("Ett oväntat fel inträffade.")
    else:
        body = error_body(str(exc), type=type(exc).__name__)
    return JSONResponse(body, status_code=500)


def create_app(config: Settings = settings) -> FastAPI:
    """Assemble middleware, error handlers and routers."""
    interactive_docs = not config.is_production
    application = FastAPI(
        title="Luhnlab",
        description="Swedish test data with valid checksums: personnummer, companies, cards, IBAN",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if interactive_docs else None,
        redoc_url="/redoc" if interactive_docs else None,
    )

    application.add_middleware(SecurityHeadersMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-API-Key", "X-Request-ID"],
        expose_headers=EXPOSED_HEADERS,
        max_age=600,
    )

    application.add_exception_handler(LuhnLabError, luhnlab_error_handler)
    application.add_exception_handler(RequestValidationError, validation_error_handler)
    application.add_exception_handler(StarletteHTTPException, http_error_handler)
    application.add_exception_handler(Exception, unhandled_error_handler)

    @application.get("/health")
    async def health_check() -> dict[str, Any]:
        dataset = get_postal_dataset()
        return {
            "status": "healthy" if dataset.records else "degraded",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": __version__,
            "postal_data": {"source": dataset.source, "localities": len(dataset.records)},
        }

    @application.get("/")
    async def index() -> dict[str, str]:
        return {
            "name": "Luhnlab",
            "description": "Swedish test data API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    # Every /api route resolves the caller's plan and charges the quota first
    guarded = [Depends(get_plan_context), Depends(enforce_quota)]
    for router in (generate_router, validate_router, mask_router):
        application.include_router(router, prefix="/api", dependencies=guarded)

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
