"""RentalTrack API application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .core.exceptions import RentalTrackException
from .core.logging import (
    AccessLogMiddleware,
    RequestIdMiddleware,
    get_logger,
    setup_logging,
    shutdown_logging,
)
from .database import AsyncSessionLocal
from .modules import auth, property_management, reminders, rent_management
from .modules import tenant_management
from .modules.auth.services import ensure_initial_admin

logger = get_logger(__name__)

ROUTERS = (
    auth.router,
    auth.users_router,
    auth.audit_router,
    property_management.router,
    property_management.landlords_router,
    property_management.owners_router,
    tenant_management.router,
    rent_management.router,
    rent_management.history_router,
    rent_management.process_router,
    reminders.router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info(
        "RentalTrack starting",
        extra={"env": settings.app_env, "debug": settings.app_debug},
    )
    async with AsyncSessionLocal() as db:
        await ensure_initial_admin(db)
    yield
    logger.info("RentalTrack stopped")
    shutdown_logging()


def _docs_path(path: str) -> str | None:
    return f"{settings.api_prefix}{path}" if settings.app_debug else None


app = FastAPI(
    title=settings.api_title,
    description="Rental property management: landlords, tenants and rent reviews",
    version=settings.api_version,
    docs_url=_docs_path("/docs"),
    redoc_url=_docs_path("/redoc"),
    openapi_url=_docs_path("/openapi.json"),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
# Added last so it runs first: access log lines then carry the request id
app.add_middleware(AccessLogMiddleware)
app.add_middleware(RequestIdMiddleware)


def _failure(status_code: int, message: str, error, details=None) -> JSONResponse:
    body = {"success": False, "message": message, "error": error, "data": None}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


@app.exception_handler(RentalTrackException)
async def rentaltrack_exception_handler(request: Request, exc: RentalTrackException):
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}",
        extra={"status_code": exc.status_code},
    )
    return _failure(exc.status_code, exc.message, exc.message, exc.details or None)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    error = str(exc) if settings.app_debug else "Internal server error"
    return _failure(500, "Internal server error", error)


@app.get(f"{settings.api_prefix}/health", tags=["Health"])
async def health_check():
    return {
        "status": "healthy",
        "version": settings.api_version,
        "env": settings.app_env,
    }


for api_router in ROUTERS:
    app.include_router(api_router, prefix=settings.api_prefix)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rentaltrack_backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.app_debug,
    )
