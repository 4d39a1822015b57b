"""FastAPI application factory and global exception handling."""

from __future__ import annotations

import logging
from typing import Any, Dict, Type

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

from profilesync import __version__ as app_version
from profilesync.api.routes import router
from profilesync.config import get_settings
from profilesync.errors import (
    CorruptStateError,
    FetchError,
    NotFoundError,
    ParseError,
    PersistenceError,
    ProfileSyncError,
)

logger = logging.getLogger(__name__)

ERROR_RESPONSES: Dict[Type[ProfileSyncError], tuple[int, str]] = {
    ParseError: (400, "parse_error"),
    NotFoundError: (404, "not_found"),
    CorruptStateError: (500, "corrupt_state"),
    FetchError: (502, "fetch_failed"),
    PersistenceError: (503, "persistence_error"),
}


def error_response(exc: ProfileSyncError) -> JSONResponse:
    status_code, code = 500, "internal_error"
    for error_type, (mapped_status, mapped_code) in ERROR_RESPONSES.items():
        if isinstance(exc, error_type):
            status_code, code = mapped_status, mapped_code
            break
    return JSONResponse(
        status_code=status_code, content={"error": code, "details": str(exc)}
    )


def create_application() -> FastAPI:
    """Create and configure the FastAPI application instance."""
    settings = get_settings()
    logging.getLogger("profilesync").setLevel(settings.log_level.upper())

    app = FastAPI(
        title=settings.app_name,
        description="CSV profile ingestion and active-profile synchronization.",
        version=app_version,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": "validation_error", "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        detail = exc.detail
        if isinstance(detail, dict) and "error" in detail:
            payload = detail
        elif detail == "There was an error parsing the body":
            payload = {"error": "invalid_json", "details": detail}
        else:
            payload = {"error": "http_error", "details": detail}
        return JSONResponse(status_code=exc.status_code, content=payload)

    @app.exception_handler(ProfileSyncError)
    async def profile_sync_exception_handler(
        request: Request, exc: ProfileSyncError
    ) -> JSONResponse:
        logger.info(f"{request.method} {request.url.path} failed: {exc}")
        return error_response(exc)

    @app.get("/healthz", tags=["health"])
    async def healthz() -> dict[str, Any]:
        return {
            "status": "ok",
            "version": app_version,
            "environment": settings.environment,
            "max_csv_bytes": settings.max_csv_bytes,
        }

    app.include_router(router)
    return app


app = create_application()
