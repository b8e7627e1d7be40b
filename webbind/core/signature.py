"""
Where: webbind/core/signature.py
What: Build ParameterDescriptor objects from handler signatures.
Why: Binding markers and declared types are read once at registration,
     so per-request resolution never inspects annotations.
"""

import inspect
import logging
from typing import Annotated, Any, Callable, List, Optional, get_args, get_origin, get_type_hints

from ..models.parameter import (
    BindingKind,
    ContainerKind,
    ParameterDescriptor,
    RequestParam,
    RequestPart,
    ValueKind,
)
from ..models.request import WebRequest
from ..models.upload import Part, UploadedFile
from .exceptions import IllegalStateError
from .types import container_of, is_mapping_type, mapping_value_type, unwrap_optional

logger = logging.getLogger("webbind.signature")

_UNSUPPORTED_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.VAR_POSITIONAL,
    inspect.Parameter.VAR_KEYWORD,
)


def _split_annotated(annotation: Any) -> tuple:
    """Return (type, binding marker or None) for a possibly Annotated type."""
    if get_origin(annotation) is Annotated:
        base, *metadata = get_args(annotation)
        markers = [m for m in metadata if isinstance(m, (RequestParam, RequestPart))]
        if len(markers) > 1:
            raise IllegalStateError(f"Multiple binding markers declared on {annotation!r}")
        return base, (markers[0] if markers else None)
    return annotation, None


def _classify(tp: Any) -> tuple:
    """Return (value kind, container kind, element type) for an unwrapped type."""
    if tp is WebRequest:
        return ValueKind.REQUEST, ContainerKind.NONE, tp
    if is_mapping_type(tp):
        return ValueKind.MAPPING, ContainerKind.NONE, mapping_value_type(tp)

    container, element_type = container_of(tp)
    element_type, _ = unwrap_optional(element_type)
    if element_type is UploadedFile:
        return ValueKind.FILE, container, element_type
    if element_type is Part:
        return ValueKind.PART, container, element_type
    return ValueKind.SCALAR, container, element_type


def describe_parameter(
    index: int,
    parameter_name: str,
    annotation: Any,
    signature_default: Any = inspect.Parameter.empty,
) -> ParameterDescriptor:
    """
    Build the descriptor of a single parameter.

    Args:
        index: position in the handler signature
        parameter_name: declared parameter name
        annotation: declared type, optionally Annotated with a binding marker
        signature_default: Python default value from the signature

    Returns:
        ParameterDescriptor
    """
    # Optional[Annotated[T, marker]] and Annotated[Optional[T], marker] both occur.
    outer_type, _ = unwrap_optional(annotation)
    base_type, marker = _split_annotated(outer_type)
    declared_type, _ = unwrap_optional(base_type)
    value_kind, container, element_type = _classify(declared_type)

    binding = BindingKind.NONE
    binding_name = ""
    required = False
    default_value: Optional[Any] = None

    if isinstance(marker, RequestParam):
        binding = BindingKind.REQUEST_PARAM
        binding_name = marker.name
        default_value = marker.default
        required = marker.required
    elif isinstance(marker, RequestPart):
        binding = BindingKind.REQUEST_PART
        binding_name = marker.name
        required = marker.required

    if default_value is None and signature_default is not inspect.Parameter.empty:
        default_value = signature_default
    # A None signature default declares the parameter optional without a default.
    if default_value is not None or signature_default is None:
        required = False

    return ParameterDescriptor(
        index=index,
        parameter_name=parameter_name,
        declared_type=declared_type,
        value_kind=value_kind,
        container=container,
        element_type=element_type,
        binding=binding,
        binding_name=binding_name,
        default_value=default_value,
        required=required,
    )


def describe_handler(handler: Callable[..., Any]) -> List[ParameterDescriptor]:
    """
    Build descriptors for every parameter of a handler function.

    Raises:
        IllegalStateError: for positional-only, *args or **kwargs parameters,
            or when type hints cannot be evaluated
    """
    try:
        hints = get_type_hints(handler, include_extras=True)
    except Exception as e:
        raise IllegalStateError(f"Cannot evaluate type hints of {handler!r}: {e}") from e

    descriptors: List[ParameterDescriptor] = []
    signature = inspect.signature(handler)
    for index, parameter in enumerate(signature.parameters.values()):
        if parameter.kind in _UNSUPPORTED_KINDS:
            raise IllegalStateError(
                f"Parameter '{parameter.name}' of {handler.__qualname__} cannot be bound: "
                f"{parameter.kind.description} parameters are not supported"
            )
        annotation = hints.get(parameter.name, str)
        descriptors.append(
            describe_parameter(index, parameter.name, annotation, parameter.default)
        )

    logger.debug(
        f"Described {len(descriptors)} parameters of {handler.__qualname__}",
        extra={"handler": handler.__qualname__},
    )
    return descriptors
