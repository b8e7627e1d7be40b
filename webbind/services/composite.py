"""
Argument resolver composite.

Dispatches each parameter to the first resolver that supports it and
caches that choice per descriptor.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Protocol

from ..core.binder import WebDataBinderFactory
from ..core.exceptions import IllegalArgumentError
from ..models.parameter import ParameterDescriptor
from ..models.request import WebRequest
from .map_resolver import RequestParamMapResolver
from .param_resolver import RequestParamResolver
from .request_resolver import WebRequestResolver

logger = logging.getLogger(__name__)


class ArgumentResolver(Protocol):
    def supports(self, descriptor: ParameterDescriptor) -> bool: ...

    def resolve(
        self,
        descriptor: ParameterDescriptor,
        request: WebRequest,
        binder_factory: Optional[WebDataBinderFactory] = None,
    ) -> Any: ...


class ArgumentResolverComposite:
    def __init__(self, resolvers: Iterable[ArgumentResolver] = ()):
        self._resolvers: List[ArgumentResolver] = list(resolvers)
        self._cache: Dict[ParameterDescriptor, ArgumentResolver] = {}

    @property
    def resolvers(self) -> List[ArgumentResolver]:
        return list(self._resolvers)

    def add_resolver(self, resolver: ArgumentResolver) -> "ArgumentResolverComposite":
        self._resolvers.append(resolver)
        return self

    def supports(self, descriptor: ParameterDescriptor) -> bool:
        return self._get_resolver(descriptor) is not None

    def resolve(
        self,
        descriptor: ParameterDescriptor,
        request: WebRequest,
        binder_factory: Optional[WebDataBinderFactory] = None,
    ) -> Any:
        """
        Resolve a parameter with the first supporting resolver.

        Raises:
            IllegalArgumentError: when no resolver supports the parameter
        """
        resolver = self._get_resolver(descriptor)
        if resolver is None:
            raise IllegalArgumentError(
                f"Unknown parameter type [{descriptor.type_name}] for '{descriptor.parameter_name}'"
            )
        return resolver.resolve(descriptor, request, binder_factory)

    def _get_resolver(self, descriptor: ParameterDescriptor) -> Optional[ArgumentResolver]:
        resolver = self._cache.get(descriptor)
        if resolver is not None:
            return resolver
        for candidate in self._resolvers:
            if candidate.supports(descriptor):
                logger.debug(f"{descriptor!r} resolved by {candidate!r}")
                self._cache[descriptor] = candidate
                return candidate
        return None


def default_resolvers(use_default_resolution: bool = True) -> ArgumentResolverComposite:
    """
    Standard resolver order: annotated parameters first, then the request
    itself, then unannotated simple types as the catch-all.
    """
    composite = ArgumentResolverComposite(
        [
            RequestParamResolver(use_default_resolution=False),
            RequestParamMapResolver(),
            WebRequestResolver(),
        ]
    )
    if use_default_resolution:
        composite.add_resolver(RequestParamResolver(use_default_resolution=True))
    return composite
