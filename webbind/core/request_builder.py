"""
Where: webbind/core/request_builder.py
What: Build a WebRequest from a Starlette request.
Why: Resolvers read a framework-neutral request model, never Starlette objects.
"""

import logging
from typing import Optional

from fastapi import Request
from starlette.datastructures import UploadFile

from ..models.request import MultipartFiles, WebRequest
from ..models.upload import Part, UploadedFile

logger = logging.getLogger("webbind.request_builder")

FORM_URLENCODED = "application/x-www-form-urlencoded"
MULTIPART_FORM_DATA = "multipart/form-data"


def _media_type(content_type: Optional[str]) -> str:
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


async def build_web_request(
    request: Request,
    parse_multipart: bool = True,
    max_files: int = 1000,
    max_fields: int = 1000,
) -> WebRequest:
    """
    Build a WebRequest from a Starlette/FastAPI request.

    Args:
        request: incoming request
        parse_multipart: collect uploads into MultipartFiles; when False the
            request carries no file collection even if the body is multipart
        max_files: form parsing limit for uploaded files
        max_fields: form parsing limit for plain fields

    Returns:
        WebRequest with query parameters first, then form fields, in order
    """
    content_type = request.headers.get("content-type")
    media_type = _media_type(content_type)
    is_multipart = media_type == MULTIPART_FORM_DATA

    web_request = WebRequest(
        method=request.method,
        path=request.url.path,
        content_type=content_type,
        headers=dict(request.headers),
        multipart_files=MultipartFiles() if is_multipart and parse_multipart else None,
    )

    for name, value in request.query_params.multi_items():
        web_request.add_parameter(name, value)

    if media_type not in (FORM_URLENCODED, MULTIPART_FORM_DATA):
        return web_request

    async with request.form(max_files=max_files, max_fields=max_fields) as form:
        for name, value in form.multi_items():
            if isinstance(value, UploadFile):
                content = await value.read()
                if is_multipart:
                    web_request.add_part(
                        Part(
                            name=name,
                            content=content,
                            filename=value.filename,
                            content_type=value.content_type,
                        )
                    )
                if web_request.multipart_files is not None:
                    web_request.multipart_files.add(
                        UploadedFile(
                            name=name,
                            content=content,
                            filename=value.filename,
                            content_type=value.content_type,
                        )
                    )
                continue

            web_request.add_parameter(name, value)
            if is_multipart:
                web_request.add_part(Part(name=name, content=value.encode("utf-8")))

    logger.debug(
        f"Built request model for {request.method} {request.url.path}",
        extra={
            "parameters": len(web_request.parameter_names()),
            "parts": len(web_request.get_parts()),
        },
    )
    return web_request
