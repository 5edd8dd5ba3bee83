"""Map domain errors to HTTP responses with a uniform ``{error, detail}`` body."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ehr.errors import ConflictError, EHRError, NotFoundError

logger = logging.getLogger(__name__)


def error_response(status_code: int, kind: str, detail) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": kind, "detail": jsonable_encoder(detail)})


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(EHRError)
    async def handle_domain_error(request: Request, exc: EHRError):
        if isinstance(exc, NotFoundError):
            status_code = 404
        elif isinstance(exc, ConflictError):
            status_code = 409
        else:
            status_code = 400
        logger.info("%s %s -> %s: %s", request.method, request.url.path, status_code, exc)
        return error_response(status_code, exc.kind, str(exc))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return error_response(400, "validation", exc.errors())

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(500, "internal", "internal server error")
