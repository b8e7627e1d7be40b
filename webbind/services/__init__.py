"""
Services package.

Provides argument resolvers and handler invocation.
"""

from .composite import ArgumentResolverComposite, default_resolvers
from .invoker import HandlerInvoker
from .map_resolver import RequestParamMapResolver
from .param_resolver import RequestParamResolver
from .request_resolver import WebRequestResolver

__all__ = [
    "ArgumentResolverComposite",
    "default_resolvers",
    "HandlerInvoker",
    "RequestParamMapResolver",
    "RequestParamResolver",
    "WebRequestResolver",
]
