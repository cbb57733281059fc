"""
PHP class renderer.

Renders one ``<Name>.class.php`` file per class. Polymorphic classes carry
a JMS serializer ``@Discriminator`` annotation listing their subclasses.
"""

from __future__ import annotations

from ...utils import OrderedSet, upper_case_first
from ..analyzer.class_model import ClassDef, InstanceVariable, TypeRef
from ..analyzer.type_registry import ARRAY_TYPE, INTEGER_TYPE, NUMBER_TYPE, STRING_TYPE
from .base import ClassRenderer

DISCRIMINATOR_ANNOTATION = "JMS\\Serializer\\Annotation\\Discriminator"

INDENT = "  "


class PhpModelClassRenderer(ClassRenderer):
    """PHP model class renderer."""

    LANGUAGE = "php"
    TEMPLATE_LANG = "php"
    FILE_EXTENSION = "php"

    TYPE_MAP = {
        ARRAY_TYPE: "array",
        STRING_TYPE: "string",
        INTEGER_TYPE: "int",
        NUMBER_TYPE: "int",
    }

    PROJECT_TEMPLATES = {
        "README.md": "README.md.jinja2",
        "composer.json": "composer.json.jinja2",
    }

    def render_preamble_block(self, class_def: ClassDef) -> str:
        comment = self.render_generation_comment("//")
        return "<?php" + (f"\n\n{comment}" if comment else "")

    def get_class_access_modifiers(self, class_def: ClassDef) -> list[str]:
        return []

    def render_class_file_name(self, class_def: ClassDef) -> str:
        return f"{class_def.name}.class.php"

    def get_namespace(self, type_ref: TypeRef) -> str:
        return type_ref.package_name.replace(".", "\\")

    def _qualified_name(self, type_ref: TypeRef) -> str:
        return f"{self.get_namespace(type_ref)}\\{type_ref.name}"

    def render_namespace_block(self, class_def: ClassDef) -> str:
        return f"namespace {self.get_namespace(class_def.type)};"

    def render_uses_block(self, class_def: ClassDef) -> str:
        uses: OrderedSet[str] = OrderedSet()
        for type_ref in self.collect_used_types(class_def):
            uses.add(f"use {self._qualified_name(type_ref)};")
        if class_def.subclasses:
            uses.add(f"use {DISCRIMINATOR_ANNOTATION};")
        return "\n".join(uses)

    def render_class_comment_block(self, class_def: ClassDef) -> str:
        annotations = self.render_class_annotations_block(class_def)
        if not annotations:
            return ""
        return f"/**\n{annotations}\n */"

    def render_class_annotations_block(self, class_def: ClassDef) -> str:
        annotations = []
        discriminator = self.get_dispatch_discriminator(class_def)
        if discriminator is not None:
            mapping = ", ".join(f'"{subclass.discriminator_value}": "{self._qualified_name(subclass.type)}"' for subclass in class_def.subclasses)
            annotations.append(f'@Discriminator(field = "{discriminator}", map = {{{mapping}}})')
        return "\n".join(f" * {annotation}" for annotation in annotations)

    def render_extends_clause(self, class_def: ClassDef) -> str:
        if class_def.extends_user_defined_super_class():
            return f"extends {class_def.super_class.name}"
        return ""

    def render_instance_variables_block(self, class_def: ClassDef) -> str:
        return "\n".join(
            f"{INDENT}{variable.accessibility.value} {self.render_variable_type(variable)} ${variable.name};" for variable in class_def.own_instance_variables
        )

    def render_constructor_block(self, class_def: ClassDef) -> str:
        variables = class_def.own_instance_variables
        parameters = ", ".join(f"{self.render_variable_type(variable)} ${variable.name}" for variable in variables)
        lines = [f"{INDENT}public function __construct({parameters})", f"{INDENT}{{"]
        lines.extend(f"{INDENT * 2}$this->{variable.name} = ${variable.name};" for variable in variables)
        lines.append(f"{INDENT}}}")
        return "\n".join(lines)

    def render_accessors_block(self, class_def: ClassDef) -> str:
        return "\n\n".join(
            self.render_getter_block(variable) + "\n\n" + self.render_setter_block(variable) for variable in class_def.own_instance_variables if variable.is_private
        )

    def render_getter_block(self, variable: InstanceVariable) -> str:
        type_name = self.render_variable_type(variable)
        return "\n".join(
            [
                f"{INDENT}public function get{upper_case_first(variable.name)}(): {type_name}",
                f"{INDENT}{{",
                f"{INDENT * 2}return $this->{variable.name};",
                f"{INDENT}}}",
            ]
        )

    def render_setter_block(self, variable: InstanceVariable) -> str:
        type_name = self.render_variable_type(variable)
        return "\n".join(
            [
                f"{INDENT}public function set{upper_case_first(variable.name)}({type_name} ${variable.name}): void",
                f"{INDENT}{{",
                f"{INDENT * 2}$this->{variable.name} = ${variable.name};",
                f"{INDENT}}}",
            ]
        )
