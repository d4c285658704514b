"""PlantWatch API — exception handlers producing the ``{"errors": [...]}`` body."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from plantwatch.core.validation import RequestInvalid, error_messages

logger = logging.getLogger("plantwatch.api")


def error_response(status_code: int, errors: list[str], headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"errors": errors}, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        detail = exc.detail
        errors = [str(d) for d in detail] if isinstance(detail, list) else [str(detail)]
        return error_response(exc.status_code, errors, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return error_response(400, error_messages(exc.errors()))

    @app.exception_handler(RequestInvalid)
    async def request_invalid_handler(request: Request, exc: RequestInvalid) -> JSONResponse:
        return error_response(400, exc.errors)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return error_response(500, ["Internal server error"])
