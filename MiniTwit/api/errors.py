from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ..errors import MiniTwitError, StorageFailure, ValidationError

logger = logging.getLogger(__name__)


def error_response(exc: MiniTwitError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def handle_minitwit_error(request: Request, exc: MiniTwitError) -> JSONResponse:
    if isinstance(exc, StorageFailure):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return error_response(exc)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    logger.warning("%s %s malformed request: %s", request.method, request.url.path, errors)
    in_body = any(error.get("loc", ("",))[0] == "body" for error in errors)
    message = "Failed to parse JSON" if in_body else "Invalid request parameters"
    return error_response(ValidationError(message))


async def handle_storage_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("%s %s storage error", request.method, request.url.path)
    return error_response(StorageFailure())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MiniTwitError, handle_minitwit_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(SQLAlchemyError, handle_storage_error)
