"""
Data model definitions package.

Aggregates binding markers, descriptors and request models for use in other modules.
"""

from .parameter import (
    BindingKind,
    ContainerKind,
    ParameterDescriptor,
    RequestParam,
    RequestPart,
    ValueKind,
)
from .request import MultipartFiles, WebRequest
from .upload import Part, UploadedFile

__all__ = [
    "BindingKind",
    "ContainerKind",
    "ParameterDescriptor",
    "RequestParam",
    "RequestPart",
    "ValueKind",
    "MultipartFiles",
    "WebRequest",
    "Part",
    "UploadedFile",
]
