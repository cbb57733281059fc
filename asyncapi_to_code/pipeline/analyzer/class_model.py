"""
Class model node definitions.

These nodes are the analyzed and resolved form of the schema components,
ready for rendering. All type references are resolved, inheritance is
linked, and every node is frozen once the evaluator returns it.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum


class Accessibility(str, Enum):
    """Visibility of an instance variable."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


@dataclass(frozen=True)
class TypeRef:
    """A resolved type: either a built-in primitive or a generated class."""

    name: str
    package_name: str = ""  # Empty for built-in types
    is_built_in: bool = False

    @property
    def is_user_defined(self) -> bool:
        return not self.is_built_in

    @property
    def qualified_name(self) -> str:
        if self.is_built_in or not self.package_name:
            return self.name
        return f"{self.package_name}.{self.name}"


@dataclass(frozen=True)
class InstanceVariable:
    """A typed field of a class."""

    name: str
    type: TypeRef
    accessibility: Accessibility = Accessibility.PRIVATE
    is_discriminator: bool = False

    @property
    def is_private(self) -> bool:
        return self.accessibility is Accessibility.PRIVATE

    @property
    def is_protected(self) -> bool:
        return self.accessibility is Accessibility.PROTECTED

    @property
    def is_public(self) -> bool:
        return self.accessibility is Accessibility.PUBLIC


@dataclass(frozen=True)
class SubclassRef:
    """A known subclass and the discriminator value that selects it."""

    discriminator_value: str
    type: TypeRef


@dataclass(frozen=True)
class ClassDef:
    """A class definition."""

    name: str
    package_name: str
    super_class: ClassDef | None = None
    instance_variables: tuple[InstanceVariable, ...] = ()

    # Subclasses dispatched on this class's discriminator, in document order
    subclasses: tuple[SubclassRef, ...] = ()

    # Discriminator declared by this class or inherited from its superclass
    discriminator_name: str | None = None

    # Original schema component key
    original_name: str = field(default="", compare=False)

    @property
    def type(self) -> TypeRef:
        return TypeRef(name=self.name, package_name=self.package_name)

    @property
    def key(self) -> tuple[str, str]:
        return (self.package_name, self.name)

    def extends_user_defined_super_class(self) -> bool:
        return self.super_class is not None

    @property
    def discriminators(self) -> tuple[InstanceVariable, ...]:
        return tuple(v for v in self.instance_variables if v.is_discriminator)

    @property
    def discriminator(self) -> InstanceVariable | None:
        """The discriminator variable, looked up on this class first, then on its ancestors."""
        if self.discriminator_name is None:
            return None
        for class_def in (self, *self.ancestors()):
            for variable in class_def.instance_variables:
                if variable.name == self.discriminator_name:
                    return variable
        return None

    @property
    def own_instance_variables(self) -> tuple[InstanceVariable, ...]:
        """Instance variables a backend declares on this class (discriminators excluded)."""
        return tuple(v for v in self.instance_variables if not v.is_discriminator)

    def ancestors(self) -> Iterator[ClassDef]:
        current = self.super_class
        while current is not None:
            yield current
            current = current.super_class


class ClassModel:
    """The complete, ordered set of classes of one generation run."""

    def __init__(self, classes: Iterable[ClassDef] = ()):
        self._classes = tuple(classes)
        self._by_key = {class_def.key: class_def for class_def in self._classes}

    @property
    def classes(self) -> tuple[ClassDef, ...]:
        return self._classes

    def get(self, package_name: str, name: str) -> ClassDef | None:
        return self._by_key.get((package_name, name))

    def subclasses_of(self, class_def: ClassDef) -> tuple[ClassDef, ...]:
        return tuple(c for c in self._classes if c.super_class is not None and c.super_class.key == class_def.key)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def __iter__(self) -> Iterator[ClassDef]:
        return iter(self._classes)

    def __len__(self) -> int:
        return len(self._classes)

    def __repr__(self) -> str:
        return f"ClassModel({[c.name for c in self._classes]!r})"
