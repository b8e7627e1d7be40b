"""
Resolver for RequestParam-annotated mappings declared without a name.
"""

from typing import Any, Optional

from ..core.binder import WebDataBinderFactory
from ..models.parameter import BindingKind, ParameterDescriptor, ValueKind
from ..models.request import WebRequest
from .param_resolver import collect_parameter_map


class RequestParamMapResolver:
    """Binds every request parameter into a dict argument."""

    def supports(self, descriptor: ParameterDescriptor) -> bool:
        return (
            descriptor.binding is BindingKind.REQUEST_PARAM
            and descriptor.value_kind is ValueKind.MAPPING
            and not descriptor.binding_name
        )

    def resolve(
        self,
        descriptor: ParameterDescriptor,
        request: WebRequest,
        binder_factory: Optional[WebDataBinderFactory] = None,
    ) -> Any:
        return collect_parameter_map(request, descriptor.element_type)
