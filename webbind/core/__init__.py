"""
Core logic package.

Provides shared logic such as type conversion, data binding and signature introspection.
"""

from .binder import DataBinder, StringTrimmer, WebDataBinderFactory
from .conversion import ConversionService
from .request_builder import build_web_request
from .signature import describe_handler, describe_parameter

__all__ = [
    "DataBinder",
    "StringTrimmer",
    "WebDataBinderFactory",
    "ConversionService",
    "build_web_request",
    "describe_handler",
    "describe_parameter",
]
