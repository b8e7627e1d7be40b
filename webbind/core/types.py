"""
Where: webbind/core/types.py
What: Helpers that classify declared parameter types.
Why: Signature introspection and the data binder share one view of
     containers, optionals and simple value types.
"""

import collections.abc
import datetime
import decimal
import enum
import pathlib
import types
import uuid
from typing import Any, Tuple, Union, get_args, get_origin

from ..models.parameter import ContainerKind

SIMPLE_TYPES = (
    str,
    int,
    float,
    complex,
    bool,
    decimal.Decimal,
    uuid.UUID,
    datetime.date,
    datetime.datetime,
    datetime.time,
    datetime.timedelta,
    pathlib.PurePath,
)

_LIST_ORIGINS = (list, collections.abc.Sequence, collections.abc.MutableSequence)
_MAPPING_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)

_UNION_TYPES: Tuple[Any, ...] = (Union,)
if hasattr(types, "UnionType"):
    _UNION_TYPES = (Union, types.UnionType)


def unwrap_optional(tp: Any) -> Tuple[Any, bool]:
    """
    Strip Optional[...] from a type.

    Returns:
        (inner type, whether None was part of the union)
    """
    if get_origin(tp) in _UNION_TYPES:
        args = [arg for arg in get_args(tp) if arg is not type(None)]
        if len(args) == 1:
            return args[0], len(args) != len(get_args(tp))
    return tp, False


def container_of(tp: Any) -> Tuple[ContainerKind, Any]:
    """
    Classify a sequence type.

    list[T], List[T] and Sequence[T] are LIST; tuple[T, ...] is ARRAY.
    Bare list/tuple convert their items as str.
    """
    tp, _ = unwrap_optional(tp)
    if tp is list:
        return ContainerKind.LIST, str
    if tp is tuple:
        return ContainerKind.ARRAY, str

    origin = get_origin(tp)
    args = get_args(tp)
    if origin in _LIST_ORIGINS:
        return ContainerKind.LIST, args[0] if args else str
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return ContainerKind.ARRAY, args[0]
        if not args:
            return ContainerKind.ARRAY, str
    return ContainerKind.NONE, tp


def is_mapping_type(tp: Any) -> bool:
    if tp in (dict, collections.abc.Mapping, collections.abc.MutableMapping):
        return True
    return get_origin(tp) in _MAPPING_ORIGINS


def mapping_value_type(tp: Any) -> Any:
    args = get_args(tp)
    if len(args) == 2:
        return args[1]
    return str


def is_simple_value_type(tp: Any) -> bool:
    if not isinstance(tp, type):
        return False
    return issubclass(tp, enum.Enum) or issubclass(tp, SIMPLE_TYPES)


def is_simple_property(tp: Any) -> bool:
    """A simple value type, or a tuple[T, ...] array of one."""
    container, element_type = container_of(tp)
    if container is ContainerKind.ARRAY:
        return is_simple_value_type(element_type)
    if container is ContainerKind.LIST:
        return False
    return is_simple_value_type(element_type)


def shape(values: Any, container: ContainerKind) -> Any:
    if container is ContainerKind.ARRAY:
        return tuple(values)
    if container is ContainerKind.LIST:
        return list(values)
    return values
