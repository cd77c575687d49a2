"""Map shortener exceptions onto HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shortlink.errors import NotFoundError, StoreError, ValidationError
from .api.schemas import API_INFO

logger = logging.getLogger("shortlink.web")

NOT_FOUND_TEXT = "Short URL not found"
STORE_ERROR_TEXT = "Database error occurred"


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info(f"Rejected {request.method} {request.url.path}: {exc.reason} {exc.detail}".rstrip())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": exc.message},
    )


async def handle_not_found(request: Request, exc: NotFoundError) -> PlainTextResponse:
    # Plain text keeps the miss payload minimal
    return PlainTextResponse(NOT_FOUND_TEXT, status_code=status.HTTP_404_NOT_FOUND)


async def handle_store_error(request: Request, exc: StoreError) -> JSONResponse:
    logger.error(f"Store failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": STORE_ERROR_TEXT},
    )


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # A path that exists but not for this method still gets the API description
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return JSONResponse(content=API_INFO.model_dump())
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=exc.headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(StoreError, handle_store_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
