"""
Exception handlers - map errors to ``{"code": status, "message": text}`` bodies
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from music_commerce.errors import ApiError

logger = logging.getLogger(__name__)


def error_body(status_code: int, message: str) -> dict:
    return {"code": status_code, "message": message}


def format_validation_errors(exc: RequestValidationError) -> str:
    """One line per failed location, e.g. ``body.email: String should match pattern``"""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.status_code, exc.message))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = format_validation_errors(exc)
        logger.debug(f"Rejected {request.method} {request.url.path}: {message}")
        return JSONResponse(status_code=400, content=error_body(400, message))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(status_code=500, content=error_body(500, "Internal server error"))
