"""
Class hierarchy evaluator that transforms schema components into a class model.

Runs in passes: describe every component, check the inheritance graph
(references, cycles, discriminators), then build frozen classes with
superclasses resolved before their subclasses.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ...utils import OrderedSet, snake_to_pascal_case
from ..config import CodeGeneratorConfig
from ..document import AsyncApiDocument
from ..errors import (
    AmbiguousDiscriminatorError,
    CyclicInheritanceError,
    DuplicateClassError,
    MissingDiscriminatorError,
    SchemaStructureError,
    UnresolvedTypeError,
)
from .class_model import Accessibility, ClassDef, ClassModel, InstanceVariable, SubclassRef, TypeRef
from .reference_resolver import ReferenceResolver
from .type_registry import TypeRegistry

logger = logging.getLogger(__name__)


@dataclass
class _ComponentDescription:
    """Raw facts about one schema component, gathered before any class is built."""

    key: str
    class_name: str
    package_name: str
    base_key: str | None = None
    properties: dict[str, Mapping[str, Any]] = field(default_factory=dict)
    discriminator_names: list[str] = field(default_factory=list)  # Declared by the component itself
    discriminator: str | None = None  # Own or inherited, set once the graph is checked


class ClassHierarchyEvaluator:
    """Builds the class model of an AsyncAPI document."""

    def __init__(
        self,
        document: AsyncApiDocument,
        models_namespace: str,
        registry: TypeRegistry | None = None,
        config: CodeGeneratorConfig | None = None,
    ):
        """
        Initialize the evaluator.

        Args:
            document: The AsyncAPI document (read only)
            models_namespace: Namespace assigned to generated classes
            registry: Built-in type registry
            config: Code generation configuration
        """
        self.document = document
        self.models_namespace = models_namespace
        self.registry = registry or TypeRegistry()
        self.config = config or CodeGeneratorConfig(models_namespace=models_namespace)

    @staticmethod
    def build_schema_class_name(schema_name: str) -> str:
        """Class name generated for a schema component key."""
        return snake_to_pascal_case(schema_name)

    def evaluate(self) -> ClassModel:
        """
        Analyze the schema components and build the class model.

        Returns:
            The frozen class model, one class per component in document order

        Raises:
            ModelError: If the components cannot form a valid class model
        """
        schemas = self.document.schemas()
        resolver = ReferenceResolver(schemas)
        class_names = {key: self.build_schema_class_name(key) for key in schemas}

        # First pass: describe every component
        descriptions = {key: self._describe(key, schema, resolver) for key, schema in schemas.items()}
        self._check_duplicates(descriptions)

        # Second pass: validate the inheritance graph
        for description in descriptions.values():
            self._check_acyclic(description, descriptions)
        resolved: set[str] = set()
        for key in descriptions:
            self._resolve_discriminator(key, descriptions, resolved)
        for description in descriptions.values():
            if description.base_key is not None:
                self._check_discriminator(description, descriptions[description.base_key])

        # Third pass: build classes, superclasses first
        built: dict[str, ClassDef] = {}
        for key in descriptions:
            self._build(key, descriptions, resolver, class_names, built)

        model = ClassModel(built[key] for key in descriptions)
        logger.info("Evaluated %d class(es) into namespace %s", len(model), self.models_namespace)
        return model

    def _describe(self, key: str, schema: Mapping[str, Any], resolver: ReferenceResolver) -> _ComponentDescription:
        """Gather the fields, base component and discriminators of one component."""
        class_name = self.build_schema_class_name(key)
        if not class_name:
            raise SchemaStructureError(f"schema component key {key!r} does not produce a class name", key)

        package_name = schema.get("x-package") or self.models_namespace
        description = _ComponentDescription(key=key, class_name=class_name, package_name=package_name)

        fragments = [schema]
        if "allOf" in schema:
            parts = schema["allOf"]
            if not isinstance(parts, list) or not parts:
                raise SchemaStructureError("'allOf' must be a non-empty list", class_name)

            refs = [part["$ref"] for part in parts if isinstance(part, Mapping) and "$ref" in part]
            if len(refs) > 1:
                raise SchemaStructureError(f"'allOf' references {len(refs)} schemas, only single inheritance is supported", class_name)
            if refs:
                description.base_key = resolver.resolve(refs[0], class_name).target_key

            for part in parts:
                if not isinstance(part, Mapping):
                    raise SchemaStructureError("'allOf' entries must be mappings", class_name)
                if "$ref" not in part:
                    fragments.append(part)

        for fragment in fragments:
            self._collect_fragment(description, fragment)

        for name in description.discriminator_names:
            if name not in description.properties:
                raise SchemaStructureError(f"discriminator {name!r} is not a declared property", class_name, name)

        logger.debug("Described %s as %s (base: %s)", key, class_name, description.base_key)
        return description

    def _collect_fragment(self, description: _ComponentDescription, fragment: Mapping[str, Any]) -> None:
        """Add the properties and discriminators of an object fragment."""
        class_name = description.class_name
        schema_type = fragment.get("type", "object")
        if schema_type != "object":
            raise SchemaStructureError(f"component of type {schema_type!r} cannot become a class", class_name)

        properties = fragment.get("properties", {})
        if not isinstance(properties, Mapping):
            raise SchemaStructureError("'properties' must be a mapping", class_name)

        for name, prop in properties.items():
            if not isinstance(prop, Mapping):
                raise SchemaStructureError("property schema must be a mapping", class_name, name)
            description.properties[name] = prop

        names = OrderedSet(description.discriminator_names)
        discriminator = fragment.get("discriminator")
        if discriminator is not None:
            if isinstance(discriminator, Mapping):
                discriminator = discriminator.get("propertyName")
            if not isinstance(discriminator, str) or not discriminator:
                raise SchemaStructureError("'discriminator' must name a property", class_name)
            names.add(discriminator)

        for name, prop in properties.items():
            if prop.get("x-discriminator") is True:
                names.add(name)
        description.discriminator_names = list(names)

    def _check_duplicates(self, descriptions: Mapping[str, _ComponentDescription]) -> None:
        seen: dict[tuple[str, str], str] = {}
        for description in descriptions.values():
            class_key = (description.package_name, description.class_name)
            if class_key in seen:
                raise DuplicateClassError(
                    f"components {seen[class_key]!r} and {description.key!r} both generate this class in package {description.package_name}",
                    description.class_name,
                )
            seen[class_key] = description.key

    def _check_acyclic(self, description: _ComponentDescription, descriptions: Mapping[str, _ComponentDescription]) -> None:
        chain = [description.key]
        current = description.base_key
        while current is not None:
            if current in chain:
                cycle = " -> ".join(descriptions[k].class_name for k in chain + [current])
                raise CyclicInheritanceError(f"cyclic inheritance: {cycle}", description.class_name)
            chain.append(current)
            current = descriptions[current].base_key

    def _resolve_discriminator(self, key: str, descriptions: Mapping[str, _ComponentDescription], resolved: set[str]) -> str | None:
        """Set the discriminator of a component: the inherited one, redeclared or not, plus its own.

        A class may carry at most one, so a subclass can redeclare the
        inherited discriminator but cannot add a second one.
        """
        description = descriptions[key]
        if key in resolved:
            return description.discriminator

        names: OrderedSet[str] = OrderedSet()
        if description.base_key is not None:
            inherited = self._resolve_discriminator(description.base_key, descriptions, resolved)
            if inherited is not None:
                names.add(inherited)
        for name in description.discriminator_names:
            names.add(name)

        if len(names) > 1:
            raise AmbiguousDiscriminatorError(
                f"has {len(names)} discriminator instance variables ({', '.join(names)}) counting inherited ones, at most one is allowed",
                description.class_name,
            )
        description.discriminator = next(iter(names), None)
        resolved.add(key)
        return description.discriminator

    def _check_discriminator(self, description: _ComponentDescription, base: _ComponentDescription) -> None:
        if base.discriminator is None:
            raise MissingDiscriminatorError(
                f"superclass {base.class_name} declares no discriminator instance variable",
                description.class_name,
            )

    def _build(
        self,
        key: str,
        descriptions: Mapping[str, _ComponentDescription],
        resolver: ReferenceResolver,
        class_names: Mapping[str, str],
        built: dict[str, ClassDef],
    ) -> ClassDef:
        if key in built:
            return built[key]

        description = descriptions[key]
        super_class = None
        if description.base_key is not None:
            super_class = self._build(description.base_key, descriptions, resolver, class_names, built)

        instance_variables = []
        for name, prop in description.properties.items():
            instance_variables.append(
                InstanceVariable(
                    name=name,
                    type=self._resolve_type(description.class_name, name, prop, resolver, descriptions, class_names),
                    accessibility=self._accessibility(description.class_name, name, prop),
                    is_discriminator=name == description.discriminator,
                )
            )

        class_def = ClassDef(
            name=description.class_name,
            package_name=description.package_name,
            super_class=super_class,
            instance_variables=tuple(instance_variables),
            subclasses=self._subclass_refs(description, descriptions),
            discriminator_name=description.discriminator,
            original_name=key,
        )
        built[key] = class_def
        logger.debug("Built class %s with %d instance variable(s)", class_def.name, len(class_def.instance_variables))
        return class_def

    def _subclass_refs(self, description: _ComponentDescription, descriptions: Mapping[str, _ComponentDescription]) -> tuple[SubclassRef, ...]:
        refs = []
        seen: dict[str, str] = {}
        for child in descriptions.values():
            if child.base_key != description.key:
                continue
            value = child.class_name
            prop = child.properties.get(description.discriminator, {})
            if "const" in prop:
                value = str(prop["const"])
            elif isinstance(prop.get("enum"), list) and len(prop["enum"]) == 1:
                value = str(prop["enum"][0])
            if value in seen:
                raise SchemaStructureError(
                    f"subclasses {seen[value]} and {child.class_name} share the discriminator value {value!r}",
                    description.class_name,
                    description.discriminator,
                )
            seen[value] = child.class_name
            refs.append(SubclassRef(discriminator_value=value, type=TypeRef(name=child.class_name, package_name=child.package_name)))
        return tuple(refs)

    def _resolve_type(
        self,
        class_name: str,
        field_name: str,
        prop: Mapping[str, Any],
        resolver: ReferenceResolver,
        descriptions: Mapping[str, _ComponentDescription],
        class_names: Mapping[str, str],
    ) -> TypeRef:
        """Resolve a property schema to a built-in or user-defined type."""
        if "$ref" in prop:
            target = descriptions[resolver.resolve(prop["$ref"], class_name, field_name).target_key]
            return TypeRef(name=target.class_name, package_name=target.package_name)

        # allOf/oneOf/anyOf wrapping a single $ref (used to attach a description to a reference)
        for combinator in ("allOf", "oneOf", "anyOf"):
            variants = prop.get(combinator)
            if isinstance(variants, list) and len(variants) == 1 and isinstance(variants[0], Mapping):
                return self._resolve_type(class_name, field_name, variants[0], resolver, descriptions, class_names)
            if variants is not None:
                raise UnresolvedTypeError(f"'{combinator}' with several variants is not supported", class_name, field_name)

        if "type" not in prop:
            raise SchemaStructureError("property declares neither 'type' nor '$ref'", class_name, field_name)

        type_name = prop["type"]
        if not isinstance(type_name, str):
            raise UnresolvedTypeError(f"type {type_name!r} is not a single type name", class_name, field_name)

        if self.registry.is_built_in(type_name):
            return TypeRef(name=type_name, is_built_in=True)

        key = resolver.find_by_name(type_name, class_names)
        if key is None:
            raise UnresolvedTypeError(f"type {type_name!r} is neither built-in nor a schema component", class_name, field_name)
        target = descriptions[key]
        return TypeRef(name=target.class_name, package_name=target.package_name)

    def _accessibility(self, class_name: str, field_name: str, prop: Mapping[str, Any]) -> Accessibility:
        value = prop.get("x-accessibility", self.config.default_accessibility)
        try:
            return Accessibility(value)
        except ValueError:
            raise SchemaStructureError(f"unknown accessibility {value!r}", class_name, field_name) from None
