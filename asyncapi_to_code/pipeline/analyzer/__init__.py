"""
Analyzer module.

Contains the type registry, reference resolution and the class hierarchy
evaluator that builds the class model.
"""

from __future__ import annotations

from .class_model import (
    Accessibility,
    ClassDef,
    ClassModel,
    InstanceVariable,
    SubclassRef,
    TypeRef,
)
from .evaluator import ClassHierarchyEvaluator
from .type_registry import DEFAULT_BUILT_IN_TYPES, TypeRegistry

__all__ = [
    "Accessibility",
    "ClassDef",
    "ClassModel",
    "InstanceVariable",
    "SubclassRef",
    "TypeRef",
    "ClassHierarchyEvaluator",
    "TypeRegistry",
    "DEFAULT_BUILT_IN_TYPES",
]
