import logging

from fastapi import HTTPException, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.utils.errors import AppError, StoreError

logger = logging.getLogger(__name__)


def create_response(
    message: str | None = None,
    data: dict | None = None,
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    """Return a flat JSON payload, with the optional message first."""
    content = {"message": message} if message is not None else {}
    content.update(jsonable_encoder(data or {}))
    return JSONResponse(status_code=status_code, content=content)


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def handle_exception(error: Exception, fallback_message: str = StoreError.default_message) -> JSONResponse:
    """Coerce raised errors into the shared error structure."""
    if isinstance(error, AppError):
        if isinstance(error, StoreError):
            logger.error("Store failure: %s", error.message)
            return error_response(fallback_message, error.status_code)
        return error_response(error.message, error.status_code)

    if isinstance(error, HTTPException):
        detail = error.detail if isinstance(error.detail, str) else str(error.detail)
        return error_response(detail, error.status_code)

    logger.error("Unhandled error", exc_info=error)
    return error_response(fallback_message, status.HTTP_500_INTERNAL_SERVER_ERROR)
