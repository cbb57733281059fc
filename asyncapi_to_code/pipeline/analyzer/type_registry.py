"""
Registry of built-in schema types.

Anything that is not a built-in type is a user-defined type, i.e. a class
generated from a schema component.
"""

from __future__ import annotations

from collections.abc import Iterable

ARRAY_TYPE = "array"
STRING_TYPE = "string"
INTEGER_TYPE = "integer"
NUMBER_TYPE = "number"

DEFAULT_BUILT_IN_TYPES = (ARRAY_TYPE, STRING_TYPE, INTEGER_TYPE, NUMBER_TYPE)


class TypeRegistry:
    """Answers whether a type name is built-in or user-defined."""

    def __init__(self, built_in_names: Iterable[str] = DEFAULT_BUILT_IN_TYPES):
        self._built_in_names = frozenset(built_in_names)

    @property
    def built_in_names(self) -> frozenset[str]:
        return self._built_in_names

    def is_built_in(self, type_name: str) -> bool:
        return type_name in self._built_in_names

    def is_user_defined(self, type_name: str) -> bool:
        return not self.is_built_in(type_name)
