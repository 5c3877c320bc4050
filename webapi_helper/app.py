from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from webapi_helper.core.handlers import register_exception_handlers
from webapi_helper.core.logging import configure_logging
from webapi_helper.core.middleware import add_request_context
from webapi_helper.core.settings import AppSettings, get_app_settings
from webapi_helper.schemas.result import ApiResult

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def create_app(settings: Optional[AppSettings] = None, *, setup_logging: bool = True) -> FastAPI:
    """
    Build a FastAPI application with CORS, correlation ids, the global
    exception handlers and a /health endpoint.

    Applications include their own routers on the returned instance.
    """
    settings = settings or get_app_settings()
    if setup_logging:
        configure_logging(settings.LOG_LEVEL.upper())

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
    )

    # CORS - avoid wildcard with credentials
    cors_allow_credentials = settings.CORS_ALLOW_CREDENTIALS
    if settings.CORS_ORIGINS == ["*"] and cors_allow_credentials:
        logger.warning("CORS_ALLOW_CREDENTIALS=True with '*' origins is not permitted; disabling credentials.")
        cors_allow_credentials = False

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=cors_allow_credentials,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )
    add_request_context(app)
    register_exception_handlers(app)

    @app.get("/health", tags=["Health"], summary="Health check", response_model=ApiResult[dict])
    async def health() -> ApiResult[dict]:
        return ApiResult[dict].ok({"status": "ok", "version": settings.APP_VERSION})

    return app
