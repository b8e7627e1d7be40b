"""
Resolver injecting the current WebRequest into handlers that declare it.
"""

from typing import Any, Optional

from ..core.binder import WebDataBinderFactory
from ..models.parameter import ParameterDescriptor, ValueKind
from ..models.request import WebRequest


class WebRequestResolver:
    def supports(self, descriptor: ParameterDescriptor) -> bool:
        return descriptor.value_kind is ValueKind.REQUEST

    def resolve(
        self,
        descriptor: ParameterDescriptor,
        request: WebRequest,
        binder_factory: Optional[WebDataBinderFactory] = None,
    ) -> Any:
        return request
