"""
Custom exception classes.

Represent errors related to binding request data to handler parameters.
"""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ParameterBindingError(Exception):
    """Base exception class for parameter binding."""

    pass


class MultipartError(ParameterBindingError):
    """Raised when file or part binding is attempted on a non-multipart request."""

    def __init__(self, detail: str = "The current request is not a multipart request"):
        super().__init__(detail)


class IllegalArgumentError(ParameterBindingError, ValueError):
    """Raised when the request is structurally incompatible with a parameter."""

    pass


class IllegalStateError(ParameterBindingError, RuntimeError):
    """Raised when a handler signature cannot be bound."""

    pass


class MissingRequestParameterError(ParameterBindingError):
    """Raised when a required parameter is absent from the request."""

    def __init__(self, parameter_name: str, parameter_type: str):
        self.parameter_name = parameter_name
        self.parameter_type = parameter_type
        super().__init__(
            f"Required {parameter_type} parameter '{parameter_name}' is not present"
        )


class MissingRequestFileError(MissingRequestParameterError, IllegalArgumentError):
    """Raised when a required uploaded file is absent from a multipart request."""

    pass


class TypeMismatchError(ParameterBindingError):
    """Raised when a value cannot be converted to the declared type."""

    def __init__(self, value: Any, required_type: Any, detail: str = ""):
        self.value = value
        self.required_type = required_type
        type_name = getattr(required_type, "__name__", None) or repr(required_type)
        message = f"Failed to convert value {value!r} to required type '{type_name}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


# ===========================================
# Exception Handlers
# ===========================================


async def global_exception_handler(request: Request, exc: Exception):
    """
    Catch-all handler for unhandled exceptions.
    """
    error_detail = str(exc)
    logger.error(
        f"Global exception handler caught: {exc}",
        exc_info=True,
        extra={
            "path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal Server Error", "detail": error_detail},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Handler for HTTPException.
    """
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handler for validation errors.
    """
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"message": "Validation Error", "detail": str(exc.errors())},
    )
