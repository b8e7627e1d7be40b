"""
Where: webbind/models/parameter.py
What: Binding markers and the immutable descriptor of a handler parameter.
Why: Resolvers dispatch on explicit kinds computed once at registration.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


class BindingKind(str, Enum):
    REQUEST_PARAM = "request_param"
    REQUEST_PART = "request_part"
    NONE = "none"


class ValueKind(str, Enum):
    SCALAR = "scalar"
    MAPPING = "mapping"
    FILE = "file"
    PART = "part"
    REQUEST = "request"


class ContainerKind(str, Enum):
    NONE = "none"
    LIST = "list"
    # Fixed-shape sequence, declared as tuple[T, ...]
    ARRAY = "array"


@dataclass(frozen=True)
class RequestParam:
    """
    Marks a handler parameter as bound from a request parameter or upload.

    Usage:
        def handler(name: Annotated[str, RequestParam("name", default="bar")]): ...

    A default value implies the parameter is not required.
    """

    name: str = ""
    required: bool = True
    default: Optional[Any] = None


@dataclass(frozen=True)
class RequestPart:
    """Marks a parameter as bound from a multipart part by a dedicated resolver."""

    name: str = ""
    required: bool = True


BindingMarker = Union[RequestParam, RequestPart]


@dataclass(frozen=True, eq=False)
class ParameterDescriptor:
    """
    Immutable description of one handler parameter.

    `declared_type` has Annotated and Optional stripped. `element_type` is the
    type each value converts to: the item type for containers, the value type
    for mappings, and `declared_type` otherwise.
    """

    index: int
    parameter_name: str
    declared_type: Any
    value_kind: ValueKind
    container: ContainerKind = ContainerKind.NONE
    element_type: Any = None
    binding: BindingKind = BindingKind.NONE
    binding_name: str = ""
    default_value: Optional[Any] = None
    required: bool = False

    @property
    def source_name(self) -> str:
        return self.binding_name or self.parameter_name

    @property
    def has_default(self) -> bool:
        return self.default_value is not None

    @property
    def is_collection(self) -> bool:
        return self.container is not ContainerKind.NONE

    @property
    def type_name(self) -> str:
        return getattr(self.declared_type, "__name__", None) or repr(self.declared_type)

    def __repr__(self) -> str:
        return (
            f"ParameterDescriptor(#{self.index} {self.parameter_name}: {self.type_name}, "
            f"kind={self.value_kind.value}, container={self.container.value}, "
            f"binding={self.binding.value})"
        )
