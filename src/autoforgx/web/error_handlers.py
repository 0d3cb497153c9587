import structlog
from fastapi import Request
from fastapi.responses import JSONResponse, Response

from autoforgx.errors import (
    AccessDeniedError,
    AlreadyOwnedError,
    AuthenticationError,
    DuplicateIdentityError,
    InvalidCredentialsError,
    NotFoundError,
    UnknownCourseError,
    ValidationError,
)

logger = structlog.get_logger(__name__)

# Checked in order, so subclasses must come before their base classes
USER_ERROR_STATUS: list[tuple[type[Exception], int, str]] = [
    (AuthenticationError, 401, "authentication_error"),
    (InvalidCredentialsError, 401, "invalid_credentials"),
    (AccessDeniedError, 403, "access_denied"),
    (UnknownCourseError, 404, "unknown_course"),
    (NotFoundError, 404, "not_found"),
    (DuplicateIdentityError, 400, "duplicate_identity"),
    (AlreadyOwnedError, 400, "already_owned"),
    (ValidationError, 400, "validation_error"),
]


def create_json_error_response(status_code: int, message: str, error_type: str | None = None) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content = {"message": message}
    if error_type:
        content["type"] = error_type
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    status_code, error_type = 400, "bad_request"
    for error_class, code, type_name in USER_ERROR_STATUS:
        if isinstance(exc, error_class):
            status_code, error_type = code, type_name
            break

    return create_json_error_response(status_code=status_code, message=str(exc), error_type=error_type)


async def storage_error_handler(_: Request, exc: Exception) -> Response:
    """Handle database outages (503). Details are logged where the error is raised."""
    return create_json_error_response(status_code=503, message=str(exc), error_type="storage_unavailable")


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("unexpected_error", error_type=type(exc).__name__)
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
