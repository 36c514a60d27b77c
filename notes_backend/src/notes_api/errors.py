"""Exception handlers installed on both services."""

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import DBAPIError, OperationalError, TimeoutError as PoolTimeoutError

from .ownership import DENIAL_MESSAGE, NotAuthorized

logger = logging.getLogger(__name__)


def custom_http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def not_authorized_handler(request: Request, exc: NotAuthorized):
    return PlainTextResponse(DENIAL_MESSAGE, status_code=status.HTTP_403_FORBIDDEN)


def store_unavailable_handler(request: Request, exc: Exception):
    logger.error("Store round trip failed for %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Store unavailable."},
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HTTPException, custom_http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(NotAuthorized, not_authorized_handler)
    app.add_exception_handler(OperationalError, store_unavailable_handler)
    app.add_exception_handler(PoolTimeoutError, store_unavailable_handler)
    app.add_exception_handler(DBAPIError, store_unavailable_handler)
