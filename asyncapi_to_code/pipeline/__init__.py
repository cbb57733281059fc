"""
Pipeline - AsyncAPI document to model classes.

This module provides a multi-phase architecture for generating one
source file per schema component:

1. Phase 1 (Evaluator): Resolve references and inheritance into a class model
2. Phase 2 (Renderer): Render each class with a language backend
3. Phase 3 (Project): Render README and dependency manifest
4. Phase 4 (Writer): Atomically write the artifacts
"""

from __future__ import annotations

from .analyzer import ClassHierarchyEvaluator, ClassModel, TypeRegistry
from .backends import ClassRenderer, get_renderer, list_supported_languages
from .config import CodeGeneratorConfig, OutputConfig, OutputMode
from .document import AsyncApiDocument
from .generator import Artifact, ClassFailure, GenerationDriver, GenerationResult, PipelineGenerator
from .writer import AtomicWriter, write_artifacts

__all__ = [
    "PipelineGenerator",
    "GenerationDriver",
    "GenerationResult",
    "Artifact",
    "ClassFailure",
    "ClassHierarchyEvaluator",
    "ClassModel",
    "TypeRegistry",
    "ClassRenderer",
    "get_renderer",
    "list_supported_languages",
    "CodeGeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "AsyncApiDocument",
    "AtomicWriter",
    "write_artifacts",
]
