"""Map domain and framework errors to ``{"message": ...}`` responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, NoResultFound

from dealerhub.core.exceptions import DealerHubError
from dealerhub.core.logging import LogContext, build_log_event

logger = logging.getLogger(__name__)


async def dealerhub_error_handler(request: Request, exc: DealerHubError) -> JSONResponse:
    event = "api.error.client" if exc.status_code < 500 else "api.error.server"
    extra = build_log_event(event, LogContext(request_path=request.url.path), status_code=exc.status_code)
    if exc.status_code >= 500:
        logger.error(event, extra=extra)
    else:
        logger.info(event, extra=extra)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"] if part != "body")
        errors.append({"field": location or "body", "message": error["msg"]})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request.", "errors": errors},
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning(
        "api.error.integrity",
        extra=build_log_event("api.error.integrity", LogContext(request_path=request.url.path)),
    )
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"message": "Resource already exists."})


async def no_result_handler(request: Request, exc: NoResultFound) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"message": "Resource not found."})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DealerHubError, dealerhub_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(NoResultFound, no_result_handler)
