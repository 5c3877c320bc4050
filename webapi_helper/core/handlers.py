from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from webapi_helper.core.exceptions import BusinessException
from webapi_helper.schemas.result import ApiResult, ResultCode

logger = logging.getLogger(__name__)


def _result_response(status_code: int, message: str, code: int, data: Any = None) -> JSONResponse:
    """Build a JSONResponse carrying a failed ApiResult."""
    result = ApiResult[Any].fail(message, code=code, data=jsonable_encoder(data))
    return JSONResponse(status_code=status_code, content=result.model_dump(mode="json"))


async def business_exception_handler(request: Request, exc: BusinessException) -> JSONResponse:
    """Map a BusinessException to its ApiResult failure."""
    logger.warning(
        "Business error on %s %s: %s", request.method, request.url.path, exc
    )
    return _result_response(exc.status_code, exc.message, exc.code, exc.data)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Map framework HTTP errors (404 route, 405, explicit HTTPException) to ApiResult."""
    detail = exc.detail if isinstance(exc.detail, str) else "HTTP Error"
    response = _result_response(
        exc.status_code,
        detail,
        exc.status_code,
        None if isinstance(exc.detail, str) else exc.detail,
    )
    if getattr(exc, "headers", None):
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map request validation errors to a 422 ApiResult with the error list as data."""
    return _result_response(
        422,
        "Request validation failed",
        ResultCode.VALIDATION_ERROR,
        exc.errors(),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Catch-all handler to avoid leaking stack traces and to return a structured error.
    """
    logger.exception("Unhandled error processing %s %s", request.method, request.url.path)
    return _result_response(
        500,
        "An unexpected error occurred",
        ResultCode.INTERNAL_ERROR,
    )


# PUBLIC_INTERFACE
def register_exception_handlers(app: FastAPI) -> None:
    """
    Install the global exception handlers on app so every error leaves the
    service as an ApiResult envelope.
    """
    app.add_exception_handler(BusinessException, business_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
