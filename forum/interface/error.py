"""Translation of domain errors into HTTP responses."""

from typing import NoReturn

import logfire
from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from forum.domain.error import (
    AuthError,
    DomainError,
    ForbiddenError,
    NotFoundError,
    StoreError,
    ValidationError,
)

STATUS_BY_ERROR: dict[type[DomainError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AuthError: status.HTTP_401_UNAUTHORIZED,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StoreError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_detail(error: DomainError) -> dict[str, str]:
    """Response body detail for a domain error."""
    return {"error": error.code, "message": str(error)}


def raise_http_error(error: DomainError, operation: str) -> NoReturn:
    """Raise the HTTPException matching a domain error.

    Client errors are logged as warnings, everything else as errors.

    Args:
        error: The domain error raised by a use case
        operation: Route name, used in logs
    """
    status_code = next(
        (code for cls, code in STATUS_BY_ERROR.items() if isinstance(error, cls)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )

    if status_code < 500:
        logfire.warn(
            "Request rejected",
            operation=operation,
            error_code=error.code,
            error=str(error),
        )
    else:
        logfire.error(
            "Request failed",
            operation=operation,
            error_code=error.code,
            cause=repr(error.__cause__),
        )

    raise HTTPException(status_code=status_code, detail=error_detail(error)) from error


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report schema failures as a 400 ``validation_error`` body.

    Keeps malformed input in the same error shape as rejections raised by
    the use cases.
    """
    logfire.warn(
        "Request rejected",
        operation=request.url.path,
        method=request.method,
        error_code=ValidationError.code,
        errors=[
            {"loc": list(err.get("loc", [])), "msg": err.get("msg")}
            for err in exc.errors()
        ],
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": error_detail(ValidationError("Invalid request"))},
    )
