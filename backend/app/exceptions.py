import logging
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.errors import ErrorType, ERROR_STATUS_MAP

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Custom exception that services can raise."""

    def __init__(self, error_type: ErrorType, message: str, errors: list[dict[str, Any]] | None = None):
        self.error_type = error_type
        self.message = message
        self.errors = errors
        super().__init__(message)


def field_error(field: str, message: str, error_type: str = "value_error") -> dict[str, Any]:
    """Build a field error shaped like pydantic's, located in the request body."""
    return {"type": error_type, "loc": ["body", field], "msg": message}


async def app_exception_handler(_request: Request, exc: AppException) -> JSONResponse:
    """Global handler for AppException - converts to proper HTTP response."""
    status_code = ERROR_STATUS_MAP.get(exc.error_type, 500)
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.errors if exc.errors else exc.message}
    )


async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Schema mismatches are reported as 400 with the list of field errors."""
    errors = [
        {key: value for key, value in error.items() if key in ("type", "loc", "msg", "input")}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_encoder(errors)}
    )


async def database_exception_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Storage failures surface as a generic 500."""
    logger.error(f"Database error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Database error"}
    )


async def generic_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Global handler for unhandled exceptions - returns 500."""
    logger.error(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )
