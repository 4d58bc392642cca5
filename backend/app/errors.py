from enum import Enum


class ErrorType(Enum):
    VALIDATION = "validation"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    NOT_CONFIGURED = "not_configured"
    DATABASE_ERROR = "database_error"
    INTERNAL_ERROR = "internal_error"


# Map error types to HTTP status codes
ERROR_STATUS_MAP = {
    ErrorType.VALIDATION: 400,
    ErrorType.UNAUTHORIZED: 401,
    ErrorType.NOT_FOUND: 404,
    ErrorType.NOT_CONFIGURED: 503,
    ErrorType.DATABASE_ERROR: 500,
    ErrorType.INTERNAL_ERROR: 500,
}
