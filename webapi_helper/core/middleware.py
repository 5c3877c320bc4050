from __future__ import annotations

import logging
from uuid import uuid4

from fastapi import FastAPI, Request

from webapi_helper.core.logging import correlation_id_var

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


async def request_context_middleware(request: Request, call_next):
    """
    Enrich request context with a correlation_id for logging and error responses.
    Adds 'X-Correlation-ID' to every response.
    """
    corr = request.headers.get(CORRELATION_HEADER) or request.headers.get("X-Request-ID") or str(uuid4())
    token = correlation_id_var.set(corr)
    request.state.correlation_id = corr

    logger.info("Incoming request %s %s", request.method, request.url.path)
    try:
        response = await call_next(request)
    finally:
        correlation_id_var.reset(token)

    response.headers[CORRELATION_HEADER] = corr
    return response


# PUBLIC_INTERFACE
def add_request_context(app: FastAPI) -> None:
    """Register request_context_middleware on app."""
    app.middleware("http")(request_context_middleware)
