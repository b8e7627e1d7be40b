"""
Where: webbind/exceptions.py
What: Exception handler registration and HTTP mappings for binding errors.
Why: Keep error handling setup isolated from route and app assembly.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.exceptions import (
    MissingRequestParameterError,
    MultipartError,
    ParameterBindingError,
    TypeMismatchError,
    global_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)

logger = logging.getLogger("webbind.exceptions")


async def missing_parameter_handler(request: Request, exc: MissingRequestParameterError):
    return JSONResponse(
        status_code=400,
        content={
            "message": "Missing Request Parameter",
            "detail": str(exc),
            "parameter": exc.parameter_name,
        },
    )


async def multipart_error_handler(request: Request, exc: MultipartError):
    return JSONResponse(
        status_code=400,
        content={"message": "Multipart Request Required", "detail": str(exc)},
    )


async def type_mismatch_handler(request: Request, exc: TypeMismatchError):
    return JSONResponse(
        status_code=400,
        content={"message": "Type Mismatch", "detail": str(exc)},
    )


async def binding_error_handler(request: Request, exc: ParameterBindingError):
    logger.error(
        f"Parameter binding failed: {exc}",
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(
        status_code=500,
        content={"message": "Parameter Binding Error", "detail": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(Exception, global_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ParameterBindingError, binding_error_handler)
    app.add_exception_handler(MissingRequestParameterError, missing_parameter_handler)
    app.add_exception_handler(MultipartError, multipart_error_handler)
    app.add_exception_handler(TypeMismatchError, type_mismatch_handler)
