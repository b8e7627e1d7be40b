"""
Type conversion service.

Converts raw request values (strings, lists of strings) to declared
parameter types using pydantic validation in lax mode.
"""

import logging
from typing import Any, Dict

from pydantic import TypeAdapter, ValidationError

from .exceptions import TypeMismatchError
from .types import unwrap_optional

logger = logging.getLogger("webbind.conversion")


class ConversionService:
    """
    Converts values to target types, caching one TypeAdapter per type.
    """

    def __init__(self):
        self._adapters: Dict[Any, TypeAdapter] = {}

    def _get_adapter(self, target_type: Any) -> TypeAdapter:
        try:
            adapter = self._adapters.get(target_type)
        except TypeError:
            # Unhashable type expression, build an uncached adapter.
            return TypeAdapter(target_type)
        if adapter is None:
            adapter = TypeAdapter(target_type)
            self._adapters[target_type] = adapter
        return adapter

    def can_convert(self, target_type: Any) -> bool:
        try:
            self._get_adapter(target_type)
        except Exception as e:
            logger.debug(f"No conversion available for {target_type!r}: {e}")
            return False
        return True

    def convert(self, value: Any, target_type: Any) -> Any:
        """
        Convert a value to the target type.

        Args:
            value: raw value (usually a str)
            target_type: declared type, e.g. int, List[int], Optional[str]

        Returns:
            Converted value; None stays None, and an empty string becomes
            None for targets that are not strings.

        Raises:
            TypeMismatchError: when the value cannot be converted
        """
        if value is None:
            return None
        if target_type is None or target_type is Any:
            return value
        if isinstance(target_type, type) and type(value) is target_type:
            return value
        if value == "" and not _is_text_type(target_type):
            return None

        try:
            adapter = self._get_adapter(target_type)
        except Exception as e:
            raise TypeMismatchError(value, target_type, str(e)) from e

        try:
            return adapter.validate_python(value)
        except ValidationError as e:
            raise TypeMismatchError(value, target_type, _first_error(e)) from e


def _is_text_type(target_type: Any) -> bool:
    target_type, _ = unwrap_optional(target_type)
    return isinstance(target_type, type) and issubclass(target_type, str)


def _first_error(error: ValidationError) -> str:
    errors = error.errors()
    if not errors:
        return str(error)
    return errors[0].get("msg", str(error))
