"""Render every failure as ``{"error": str, "details"?: any}``."""

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from renoplan.errors import AppError, PlanGenerationError, PlanValidationError, RateLimitExceeded
from renoplan.services.error_classifier import get_error_details

logger = structlog.get_logger()


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    content: dict = {"error": exc.message}
    if isinstance(exc, PlanGenerationError):
        details = get_error_details(exc).model_dump(by_alias=True, exclude_none=True)
        if isinstance(exc, PlanValidationError):
            details["violations"] = exc.violations
        content["details"] = details
    elif exc.details is not None:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(content))


async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error, "message": exc.message, "retryAfter": exc.retry_after},
        headers={"Retry-After": str(exc.retry_after)},
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=dict(exc.headers or {}),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"path": [str(p) for p in err["loc"] if p != "body"], "message": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid input data", "details": errors},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        method=request.method,
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
