"""
Request parameter resolver.

Binds request parameters, uploaded files and multipart parts to handler
parameters marked with RequestParam, and, in default-resolution mode, to
unannotated simple-typed parameters by their declared name.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from ..core.binder import WebDataBinderFactory
from ..core.exceptions import (
    IllegalArgumentError,
    MissingRequestFileError,
    MissingRequestParameterError,
    MultipartError,
)
from ..core.types import container_of, is_simple_property, shape
from ..models.parameter import BindingKind, ContainerKind, ParameterDescriptor, ValueKind
from ..models.request import WebRequest

logger = logging.getLogger("webbind.param_resolver")


def collect_parameter_map(
    request: WebRequest, value_type: Any
) -> Dict[str, Union[str, List[str]]]:
    """
    Collect all request parameters into a mapping.

    Names map to their value list when `value_type` is a list type,
    otherwise to their first value.
    """
    multi_valued = container_of(value_type)[0] is ContainerKind.LIST
    result: Dict[str, Union[str, List[str]]] = {}
    for name, values in request.parameter_map().items():
        if multi_valued:
            result[name] = values
        elif values:
            result[name] = values[0]
    return result


class RequestParamResolver:
    """
    Resolves handler arguments from request parameters and multipart data.

    Args:
        use_default_resolution: when True, unannotated simple-typed parameters
            and unannotated UploadedFile/Part parameters are resolved too,
            using the declared parameter name as the source name
    """

    def __init__(self, use_default_resolution: bool = False):
        self.use_default_resolution = use_default_resolution

    def supports(self, descriptor: ParameterDescriptor) -> bool:
        if descriptor.binding is BindingKind.REQUEST_PARAM:
            if descriptor.value_kind is ValueKind.MAPPING:
                return bool(descriptor.binding_name)
            return descriptor.value_kind is not ValueKind.REQUEST
        if descriptor.binding is BindingKind.REQUEST_PART:
            return False
        if not self.use_default_resolution:
            return False
        if descriptor.value_kind in (ValueKind.FILE, ValueKind.PART):
            return True
        if descriptor.value_kind is ValueKind.SCALAR:
            return is_simple_property(descriptor.declared_type)
        return False

    def resolve(
        self,
        descriptor: ParameterDescriptor,
        request: WebRequest,
        binder_factory: Optional[WebDataBinderFactory] = None,
    ) -> Any:
        """
        Resolve the argument value for a parameter.

        Args:
            descriptor: parameter to resolve
            request: current request
            binder_factory: converts raw strings to the declared type; raw
                values are returned when omitted

        Raises:
            MultipartError: file/part parameter on a non-multipart request
            IllegalArgumentError: multipart request without parsed files
            MissingRequestParameterError: required value absent
        """
        if descriptor.value_kind is ValueKind.MAPPING:
            return collect_parameter_map(request, descriptor.element_type)

        name = descriptor.source_name
        arg = self._resolve_name(name, descriptor, request)

        if arg is None:
            if descriptor.has_default:
                logger.debug(f"Parameter '{name}' absent, using default value")
                arg = descriptor.default_value
            elif descriptor.required:
                self._handle_missing_value(name, descriptor)
            else:
                return None
        elif arg == "" and descriptor.has_default:
            logger.debug(f"Parameter '{name}' empty, using default value")
            arg = descriptor.default_value

        if descriptor.value_kind is not ValueKind.SCALAR:
            return arg

        if binder_factory is None:
            return _shape_raw(arg, descriptor)

        binder = binder_factory.create_binder(request, None, name)
        return binder.convert_if_necessary(arg, descriptor.declared_type)

    def _resolve_name(
        self, name: str, descriptor: ParameterDescriptor, request: WebRequest
    ) -> Any:
        if descriptor.value_kind is ValueKind.FILE:
            return self._resolve_files(name, descriptor, request)
        if descriptor.value_kind is ValueKind.PART:
            return self._resolve_parts(name, descriptor, request)

        values = request.get_parameter_values(name)
        if values is None:
            return None
        if descriptor.is_collection:
            return values
        return values[0] if values else None

    def _resolve_files(
        self, name: str, descriptor: ParameterDescriptor, request: WebRequest
    ) -> Any:
        _assert_is_multipart(request)
        files = request.multipart_files
        if files is None:
            raise IllegalArgumentError(
                "Expected a parsed multipart request: is multipart parsing enabled?"
            )
        if descriptor.is_collection:
            return shape(files.get_files(name), descriptor.container)
        return files.get_file(name)

    def _resolve_parts(
        self, name: str, descriptor: ParameterDescriptor, request: WebRequest
    ) -> Any:
        _assert_is_multipart(request)
        if descriptor.is_collection:
            return shape(request.get_parts(name), descriptor.container)
        return request.get_part(name)

    def _handle_missing_value(self, name: str, descriptor: ParameterDescriptor) -> None:
        logger.info(
            f"Required parameter '{name}' is missing",
            extra={"parameter": name, "type": descriptor.type_name},
        )
        if descriptor.value_kind is ValueKind.FILE:
            raise MissingRequestFileError(name, descriptor.type_name)
        raise MissingRequestParameterError(name, descriptor.type_name)

    def __repr__(self) -> str:
        return f"RequestParamResolver(use_default_resolution={self.use_default_resolution})"


def _assert_is_multipart(request: WebRequest) -> None:
    if not request.is_multipart:
        raise MultipartError()


def _shape_raw(arg: Any, descriptor: ParameterDescriptor) -> Any:
    if not descriptor.is_collection:
        if isinstance(arg, (list, tuple)):
            return arg[0] if arg else None
        return arg
    if isinstance(arg, (list, tuple)):
        return shape(arg, descriptor.container)
    return shape([arg], descriptor.container)
