"""
Base class for class renderers.

Defines the capability set every target language implements. Each
capability turns one class (or instance variable) of the class model into
a text fragment; ``render_class`` composes the fragments through the
language's file template.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

import jinja2

from ...utils import OrderedSet, upper_case_first
from ..analyzer.class_model import ClassDef, InstanceVariable, TypeRef
from ..config import CodeGeneratorConfig
from ..errors import RenderError, UnmappedTypeError

TEMPLATE_DIR = Path(__file__).parent.parent.parent / "templates"


class ClassRenderer(ABC):
    """Abstract base class for class renderers.

    Renderers only read the class model and keep no state between calls,
    so one instance can render several classes concurrently.
    """

    # Language identifier used on the command line
    LANGUAGE: str = ""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension of the class template
    FILE_EXTENSION: str = ""

    # Built-in schema type -> target language type
    TYPE_MAP: dict[str, str] = {}

    # Project artifact file name -> template name
    PROJECT_TEMPLATES: dict[str, str] = {}

    # Directory the class files are written under, relative to the output root
    SOURCE_DIR: str = "src"

    def __init__(self, config: CodeGeneratorConfig | None = None):
        """
        Initialize the renderer.

        Args:
            config: Code generation configuration
        """
        self.config = config or CodeGeneratorConfig()
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR / self.TEMPLATE_LANG)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
            undefined=jinja2.StrictUndefined,
        )
        self.jinja_env.filters["upper_case_first"] = upper_case_first
        self.class_template = self.jinja_env.get_template(f"class.{self.FILE_EXTENSION}.jinja2")

    def get_project_template(self, name: str) -> jinja2.Template:
        return self.jinja_env.get_template(name)

    # File layout

    @abstractmethod
    def render_preamble_block(self, class_def: ClassDef) -> str:
        """Text placed at the very top of the file."""

    @abstractmethod
    def get_class_access_modifiers(self, class_def: ClassDef) -> list[str]:
        """Modifiers placed before the class keyword."""

    def get_class_name(self, class_def: ClassDef) -> str:
        return class_def.name

    def render_class_file_path(self, class_def: ClassDef) -> str:
        """Path of the class file, relative to the source directory."""
        return self.render_class_file_name(class_def)

    @abstractmethod
    def render_class_file_name(self, class_def: ClassDef) -> str:
        """File name of the class file."""

    @abstractmethod
    def get_namespace(self, type_ref: TypeRef) -> str:
        """Namespace of a user-defined type in the target language syntax."""

    @abstractmethod
    def render_namespace_block(self, class_def: ClassDef) -> str:
        """Namespace or package declaration."""

    # Class header

    @abstractmethod
    def render_uses_block(self, class_def: ClassDef) -> str:
        """Import statements, deduplicated in first-seen order."""

    @abstractmethod
    def render_class_comment_block(self, class_def: ClassDef) -> str:
        """Comment placed above the class declaration."""

    @abstractmethod
    def render_class_annotations_block(self, class_def: ClassDef) -> str:
        """Annotations or attributes of the class."""

    @abstractmethod
    def render_extends_clause(self, class_def: ClassDef) -> str:
        """Inheritance clause, empty for root classes."""

    # Class body

    @abstractmethod
    def render_instance_variables_block(self, class_def: ClassDef) -> str:
        """Field declarations (discriminators excluded)."""

    @abstractmethod
    def render_constructor_block(self, class_def: ClassDef) -> str:
        """Constructor taking every field in declaration order (discriminators excluded)."""

    @abstractmethod
    def render_accessors_block(self, class_def: ClassDef) -> str:
        """Getter/setter pairs for private fields only (discriminators excluded)."""

    def render_variable_type(self, variable: InstanceVariable) -> str:
        """
        Translate the type of a variable to the target language.

        Built-in types go through TYPE_MAP; a user-defined type is named by
        its class name.

        Raises:
            UnmappedTypeError: If the built-in type has no mapping
        """
        type_ref = variable.type
        if type_ref.is_built_in:
            try:
                return self.TYPE_MAP[type_ref.name]
            except KeyError:
                raise UnmappedTypeError(f"{self.LANGUAGE} renderer has no mapping for built-in type {type_ref.name!r} (variable {variable.name!r})") from None
        return type_ref.name

    # Helpers shared by backends

    def get_dispatch_discriminator(self, class_def: ClassDef) -> str | None:
        """
        Discriminator the subclasses of a class are selected by.

        Returns:
            The discriminator name, None for a class without subclasses

        Raises:
            RenderError: If the class has subclasses but no discriminator
        """
        if not class_def.subclasses:
            return None
        if class_def.discriminator_name is None:
            raise RenderError(f"{class_def.name} has subclasses but no discriminator to select them by")
        return class_def.discriminator_name

    def collect_used_types(self, class_def: ClassDef) -> OrderedSet[TypeRef]:
        """User-defined types the class refers to: superclass first, then field types.

        Discriminator variables are skipped since they are never rendered,
        and a class never refers to itself.
        """
        used: OrderedSet[TypeRef] = OrderedSet()
        if class_def.super_class is not None:
            used.add(class_def.super_class.type)
        for variable in class_def.own_instance_variables:
            if variable.type.is_user_defined and variable.type != class_def.type:
                used.add(variable.type)
        return used

    def render_declaration(self, class_def: ClassDef) -> str:
        parts = [*self.get_class_access_modifiers(class_def), "class", self.get_class_name(class_def)]
        extends_clause = self.render_extends_clause(class_def)
        if extends_clause:
            parts.append(extends_clause)
        return " ".join(parts)

    def render_body(self, class_def: ClassDef) -> str:
        blocks = [
            self.render_instance_variables_block(class_def),
            self.render_constructor_block(class_def),
            self.render_accessors_block(class_def),
        ]
        return "\n\n".join(block for block in blocks if block)

    def render_class(self, class_def: ClassDef) -> str:
        """
        Render one class file.

        Args:
            class_def: The class to render

        Returns:
            The complete file content
        """
        return self.class_template.render(
            preamble=self.render_preamble_block(class_def),
            namespace=self.render_namespace_block(class_def),
            uses=self.render_uses_block(class_def),
            comment=self.render_class_comment_block(class_def),
            annotations=self.render_class_annotations_block(class_def),
            declaration=self.render_declaration(class_def),
            body=self.render_body(class_def),
        )

    def render_generation_comment(self, comment_prefix: str) -> str:
        if not self.config.add_generation_comment:
            return ""
        return f"{comment_prefix} Generated by {self.config.generation_command}. Do not edit by hand."
