"""
Reference resolver for $ref resolution.

Resolves local $ref paths to the schema components they point at.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..document import SCHEMA_REF_PREFIX
from ..errors import UnresolvedTypeError


@dataclass(frozen=True)
class ResolvedRef:
    """A resolved $ref."""

    target_key: str  # Schema component key
    target_schema: Mapping[str, Any]


class ReferenceResolver:
    """Resolves $ref to schema components."""

    def __init__(self, schemas: Mapping[str, Mapping[str, Any]]):
        """
        Initialize the resolver.

        Args:
            schemas: Schema components keyed by component name
        """
        self.schemas = schemas

    def resolve(self, ref_path: str, class_name: str | None = None, field_name: str | None = None) -> ResolvedRef:
        """
        Resolve a $ref path to its target component.

        Args:
            ref_path: The $ref value, e.g. "#/components/schemas/Animal"
            class_name: Class being analyzed (for error messages)
            field_name: Field being analyzed (for error messages)

        Returns:
            ResolvedRef with the component key and schema

        Raises:
            UnresolvedTypeError: If the reference is external or unknown
        """
        if not isinstance(ref_path, str) or not ref_path.startswith("#"):
            raise UnresolvedTypeError(f"external reference {ref_path!r} is not supported", class_name, field_name)

        if not ref_path.startswith(SCHEMA_REF_PREFIX):
            raise UnresolvedTypeError(f"reference {ref_path!r} does not point at a schema component", class_name, field_name)

        key = ref_path[len(SCHEMA_REF_PREFIX) :]
        if key not in self.schemas:
            raise UnresolvedTypeError(f"reference {ref_path!r} does not match any schema component", class_name, field_name)

        return ResolvedRef(target_key=key, target_schema=self.schemas[key])

    def find_by_name(self, type_name: str, class_names: Mapping[str, str]) -> str | None:
        """Find a component key by its key or its generated class name."""
        if type_name in self.schemas:
            return type_name
        for key, class_name in class_names.items():
            if class_name == type_name:
                return key
        return None
