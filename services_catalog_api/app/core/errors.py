"""
Application error types and their HTTP mapping.

Services raise subclasses of ``AppError``; ``register_error_handlers``
turns them into JSON responses.  Each error carries the message shown
to the client and the JSON key it is reported under, because the
public API reports most failures as ``{"message": ...}`` and the
payment and listing failures as ``{"error": ...}``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Внутренняя ошибка сервера"
    field: str = "message"

    def __init__(self, message: str | None = None, *, field: str | None = None) -> None:
        if message is not None:
            self.message = message
        if field is not None:
            self.field = field
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Заполните все обязательные поля"


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Не авторизован"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Услуга не найдена"


class FileTypeError(AppError):
    """Upload rejected because of its content type."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Only JPEG/PNG allowed"


class FileTooLargeError(FileTypeError):
    # The constant was renamed across Starlette releases.
    status_code = 413
    message = "File too large"


class StorageError(AppError):
    """Record or asset storage failure."""

    message = "Ошибка сохранения"


class SessionStoreError(AppError):
    message = "Ошибка выхода"


class UpstreamGatewayError(AppError):
    """Payment gateway rejected the request or could not be reached."""

    message = "Ошибка при создании платежа"
    field = "error"


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={exc.field: exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "message": "Некорректный запрос",
                "details": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": AppError.message},
        )
