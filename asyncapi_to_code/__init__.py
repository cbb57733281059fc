"""AsyncAPI to Code Generator

A Python package for generating model classes from the schema components
of an AsyncAPI document. Supports PHP and C# output, with discriminator
based inheritance.
"""

__version__ = "1.0.0"

from .pipeline import (
    AsyncApiDocument,
    AtomicWriter,
    ClassHierarchyEvaluator,
    CodeGeneratorConfig,
    GenerationDriver,
    GenerationResult,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
    get_renderer,
    write_artifacts,
)

__all__ = [
    "PipelineGenerator",
    "GenerationDriver",
    "GenerationResult",
    "ClassHierarchyEvaluator",
    "AsyncApiDocument",
    "CodeGeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "AtomicWriter",
    "get_renderer",
    "write_artifacts",
]
