"""
Dependency Injection for bound routes.

Manage shared binding services stored on app.state using FastAPI Depends.
"""

from typing import Annotated

from fastapi import Depends, Request

from ..config import config
from ..core.binder import WebDataBinderFactory
from ..core.request_builder import build_web_request
from ..models.request import WebRequest


# ==========================================
# 1. Service Accessors
# ==========================================


def get_binder_factory(request: Request) -> WebDataBinderFactory:
    return request.app.state.binder_factory


# Service Dependency Type Aliases
BinderFactoryDep = Annotated[WebDataBinderFactory, Depends(get_binder_factory)]


# ==========================================
# 2. Request Model
# ==========================================


async def get_web_request(request: Request) -> WebRequest:
    """
    Build the request model for the current request.

    Args:
        request: FastAPI Request object

    Returns:
        WebRequest with parameters, parts and (when enabled) uploaded files
    """
    app_config = getattr(request.app.state, "config", None) or config
    return await build_web_request(
        request,
        parse_multipart=app_config.MULTIPART_ENABLED,
        max_files=app_config.MAX_FORM_FILES,
        max_fields=app_config.MAX_FORM_FIELDS,
    )


WebRequestDep = Annotated[WebRequest, Depends(get_web_request)]
