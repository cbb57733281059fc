"""
Generation driver and pipeline entry point.

The driver walks the class model in order and asks one renderer for one
file per class. ``PipelineGenerator`` wires the whole run:

1. Phase 1 (Evaluator): AsyncAPI document -> class model
2. Phase 2 (Driver): class model -> one artifact per class
3. Phase 3 (Project): README and dependency manifest
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .analyzer.class_model import ClassModel
from .analyzer.evaluator import ClassHierarchyEvaluator
from .analyzer.type_registry import TypeRegistry
from .backends import get_renderer
from .backends.base import ClassRenderer
from .config import CodeGeneratorConfig
from .document import AsyncApiDocument
from .errors import DuplicateFilePathError, GenerationError, RenderError
from .project import render_project_artifacts

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Artifact:
    """A generated file, relative to the output root."""

    path: str
    content: str


@dataclass(frozen=True)
class ClassFailure:
    """A class whose file could not be composed."""

    class_name: str
    error: Exception


@dataclass
class GenerationResult:
    """Artifacts of a run plus the classes that failed."""

    artifacts: list[Artifact] = field(default_factory=list)
    failures: list[ClassFailure] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failures

    def raise_for_failures(self) -> None:
        if self.failures:
            raise GenerationError(self.failures)


class GenerationDriver:
    """Renders every class of a model with one renderer."""

    def __init__(self, renderer: ClassRenderer, source_dir: str | None = None):
        """
        Initialize the driver.

        Args:
            renderer: The active renderer for this run
            source_dir: Directory prefixed to class file paths (None = renderer default, "" = none)
        """
        self.renderer = renderer
        self.source_dir = renderer.SOURCE_DIR if source_dir is None else source_dir

    def artifact_path(self, class_def) -> str:
        path = self.renderer.render_class_file_path(class_def)
        return f"{self.source_dir}/{path}" if self.source_dir else path

    def generate(self, model: ClassModel) -> GenerationResult:
        """
        Render one artifact per class, in model order.

        A class that fails with an unexpected error is recorded in the
        result's failures and its siblings are still rendered.

        Raises:
            DuplicateFilePathError: If two classes map to the same path
            RenderError: If the renderer cannot handle the model (e.g. an unmapped type)
        """
        paths: dict[str, str] = {}
        for class_def in model:
            path = self.artifact_path(class_def)
            if path in paths:
                raise DuplicateFilePathError(f"Classes {paths[path]} and {class_def.type.qualified_name} both render to {path}")
            paths[path] = class_def.type.qualified_name

        result = GenerationResult()
        for class_def in model:
            try:
                content = self.renderer.render_class(class_def)
            except RenderError:
                raise
            except Exception as e:
                logger.exception("Failed to render class %s", class_def.name)
                result.failures.append(ClassFailure(class_name=class_def.name, error=e))
                continue
            result.artifacts.append(Artifact(path=self.artifact_path(class_def), content=content))
            logger.debug("Rendered %s", class_def.name)

        logger.info("Rendered %d of %d class(es) with the %s renderer", len(result.artifacts), len(model), self.renderer.LANGUAGE)
        return result


class PipelineGenerator:
    """Runs the evaluator, the driver and the project templates for one language."""

    def __init__(
        self,
        document: AsyncApiDocument,
        config: CodeGeneratorConfig | None = None,
        language: str = "php",
        registry: TypeRegistry | None = None,
    ):
        self.document = document
        self.config = config or CodeGeneratorConfig()
        self.language = language
        self.registry = registry or TypeRegistry()
        self.renderer = get_renderer(language, self.config)

    def evaluate(self) -> ClassModel:
        evaluator = ClassHierarchyEvaluator(self.document, self.config.models_namespace, self.registry, self.config)
        return evaluator.evaluate()

    def generate(self) -> GenerationResult:
        """
        Generate every class file and the project artifacts.

        Model errors propagate before anything is rendered.
        """
        model = self.evaluate()
        result = GenerationDriver(self.renderer).generate(model)
        for path, content in render_project_artifacts(self.document, model, self.renderer, self.config).items():
            result.artifacts.append(Artifact(path=path, content=content))
        return result
