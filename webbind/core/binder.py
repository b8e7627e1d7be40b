"""
Data binder and binder factory.

A DataBinder converts raw request values to declared parameter types.
Custom editors registered per type run before the conversion service and
can pre-process values (e.g. trim strings, turn empty strings into None).
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..config import BindingConfig
from ..models.parameter import ContainerKind
from ..models.request import WebRequest
from .conversion import ConversionService
from .types import container_of, shape, unwrap_optional

logger = logging.getLogger("webbind.binder")

Editor = Callable[[Any], Any]
BinderInitializer = Callable[["DataBinder"], None]


class StringTrimmer:
    """
    Editor that trims string values.

    Args:
        empty_as_none: convert values that are empty after trimming to None
        chars: characters to strip (whitespace by default)
    """

    def __init__(self, empty_as_none: bool = False, chars: Optional[str] = None):
        self.empty_as_none = empty_as_none
        self.chars = chars

    def __call__(self, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        trimmed = value.strip(self.chars)
        if self.empty_as_none and trimmed == "":
            return None
        return trimmed

    def __repr__(self) -> str:
        return f"StringTrimmer(empty_as_none={self.empty_as_none})"


class DataBinder:
    """Per-parameter conversion context created by WebDataBinderFactory."""

    def __init__(
        self,
        target: Any = None,
        object_name: str = "",
        conversion_service: Optional[ConversionService] = None,
    ):
        self.target = target
        self.object_name = object_name
        self.conversion_service = conversion_service or ConversionService()
        self._editors: Dict[Any, Editor] = {}

    def register_custom_editor(self, required_type: Any, editor: Editor) -> None:
        self._editors[required_type] = editor

    def find_custom_editor(self, required_type: Any) -> Optional[Editor]:
        editor = self._editors.get(required_type)
        if editor is not None:
            return editor
        if isinstance(required_type, type):
            for registered_type, candidate in self._editors.items():
                if isinstance(registered_type, type) and issubclass(required_type, registered_type):
                    return candidate
        return None

    def convert_if_necessary(self, value: Any, required_type: Any) -> Any:
        """
        Convert a raw value to the required type.

        Sequences are converted element by element for list/tuple targets,
        keeping order and count. A scalar target given a sequence takes its
        first element.
        """
        if value is None:
            return None

        inner_type, _ = unwrap_optional(required_type)
        container, element_type = container_of(inner_type)

        if container is not ContainerKind.NONE:
            items = _as_list(value)
            converted = [self._convert_single(item, element_type) for item in items]
            return shape(converted, container)

        if isinstance(value, (list, tuple)):
            value = value[0] if value else None
        return self._convert_single(value, inner_type)

    def _convert_single(self, value: Any, required_type: Any) -> Any:
        editor = self.find_custom_editor(required_type)
        if editor is not None:
            value = editor(value)
        if value is None:
            return None
        return self.conversion_service.convert(value, required_type)

    def __repr__(self) -> str:
        return f"DataBinder(object_name={self.object_name!r}, editors={list(self._editors)})"


class WebDataBinderFactory:
    """
    Creates DataBinder instances for a request and a target parameter name.

    Each initializer is applied to every binder created, which is where
    custom editors get registered.
    """

    def __init__(
        self,
        conversion_service: Optional[ConversionService] = None,
        initializers: Iterable[BinderInitializer] = (),
    ):
        self.conversion_service = conversion_service or ConversionService()
        self.initializers: List[BinderInitializer] = list(initializers)

    def create_binder(self, request: WebRequest, target: Any, object_name: str) -> DataBinder:
        binder = DataBinder(target, object_name, self.conversion_service)
        for initializer in self.initializers:
            initializer(binder)
        return binder

    @classmethod
    def from_config(cls, app_config: BindingConfig) -> "WebDataBinderFactory":
        initializers: List[BinderInitializer] = []
        if app_config.TRIM_EMPTY_STRINGS:
            initializers.append(_register_string_trimmer)
            logger.info("Registered StringTrimmer(empty_as_none=True) for str parameters")
        return cls(initializers=initializers)


def _register_string_trimmer(binder: DataBinder) -> None:
    binder.register_custom_editor(str, StringTrimmer(empty_as_none=True))


def _as_list(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]
