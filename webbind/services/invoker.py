"""
Handler invocation service.

Resolves every argument of a handler from the current request and calls it.
"""

import inspect
import logging
from typing import Any, Callable, Dict, List, Optional

from starlette.concurrency import run_in_threadpool

from ..core.binder import WebDataBinderFactory
from ..core.conversion import ConversionService
from ..core.exceptions import IllegalStateError
from ..core.signature import describe_handler
from ..models.parameter import ParameterDescriptor, ValueKind
from ..models.request import WebRequest
from .composite import ArgumentResolverComposite

logger = logging.getLogger("webbind.invoker")


class HandlerInvoker:
    def __init__(
        self,
        handler: Callable[..., Any],
        resolvers: ArgumentResolverComposite,
        binder_factory: Optional[WebDataBinderFactory] = None,
    ):
        """
        Args:
            handler: plain or async function to invoke
            resolvers: resolver composite used for every argument
            binder_factory: conversion of raw values to declared types

        Raises:
            IllegalStateError: when a parameter has no supporting resolver, or
                its declared type has no conversion from request values
        """
        self.handler = handler
        self.resolvers = resolvers
        self.binder_factory = binder_factory
        self.descriptors: List[ParameterDescriptor] = describe_handler(handler)
        self._is_coroutine = inspect.iscoroutinefunction(handler)

        for descriptor in self.descriptors:
            if not resolvers.supports(descriptor):
                raise IllegalStateError(
                    f"No resolver for parameter '{descriptor.parameter_name}' "
                    f"({descriptor.type_name}) of {handler.__qualname__}"
                )
        self._check_conversions(binder_factory)

    def _check_conversions(self, binder_factory: Optional[WebDataBinderFactory]) -> None:
        conversion_service = (
            binder_factory.conversion_service if binder_factory else ConversionService()
        )
        for descriptor in self.descriptors:
            if descriptor.value_kind is not ValueKind.SCALAR:
                continue
            if not conversion_service.can_convert(descriptor.element_type):
                raise IllegalStateError(
                    f"Cannot convert request values to {descriptor.type_name} for parameter "
                    f"'{descriptor.parameter_name}' of {self.handler.__qualname__}"
                )

    def resolve_arguments(
        self, request: WebRequest, binder_factory: Optional[WebDataBinderFactory] = None
    ) -> Dict[str, Any]:
        binder_factory = binder_factory or self.binder_factory
        return {
            descriptor.parameter_name: self.resolvers.resolve(descriptor, request, binder_factory)
            for descriptor in self.descriptors
        }

    async def invoke(
        self, request: WebRequest, binder_factory: Optional[WebDataBinderFactory] = None
    ) -> Any:
        """
        Resolve all arguments and call the handler.

        Plain functions run in the threadpool so they do not block the event loop.
        """
        kwargs = self.resolve_arguments(request, binder_factory)
        logger.debug(
            f"Invoking {self.handler.__qualname__}",
            extra={"handler": self.handler.__qualname__, "arguments": len(kwargs)},
        )
        if self._is_coroutine:
            return await self.handler(**kwargs)
        return await run_in_threadpool(self.handler, **kwargs)
