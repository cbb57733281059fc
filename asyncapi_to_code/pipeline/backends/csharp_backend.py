"""
C# class renderer.

Renders one ``<Name>.cs`` file per class. Polymorphic classes carry
JsonSubTypes attributes so Newtonsoft.Json can pick the subclass from the
discriminator value.
"""

from __future__ import annotations

from ...utils import OrderedSet, lower_case_first, upper_case_first
from ..analyzer.class_model import ClassDef, InstanceVariable, TypeRef
from ..analyzer.type_registry import ARRAY_TYPE, INTEGER_TYPE, NUMBER_TYPE, STRING_TYPE
from .base import ClassRenderer

INDENT = "    "

# C# reserved keywords that need escaping
CS_RESERVED_KEYWORDS = {
    "abstract",
    "as",
    "base",
    "bool",
    "break",
    "byte",
    "case",
    "catch",
    "char",
    "checked",
    "class",
    "const",
    "continue",
    "decimal",
    "default",
    "delegate",
    "do",
    "double",
    "else",
    "enum",
    "event",
    "explicit",
    "extern",
    "false",
    "finally",
    "fixed",
    "float",
    "for",
    "foreach",
    "goto",
    "if",
    "implicit",
    "in",
    "int",
    "interface",
    "internal",
    "is",
    "lock",
    "long",
    "namespace",
    "new",
    "null",
    "object",
    "operator",
    "out",
    "override",
    "params",
    "private",
    "protected",
    "public",
    "readonly",
    "ref",
    "return",
    "sbyte",
    "sealed",
    "short",
    "sizeof",
    "stackalloc",
    "static",
    "string",
    "struct",
    "switch",
    "this",
    "throw",
    "true",
    "try",
    "typeof",
    "uint",
    "ulong",
    "unchecked",
    "unsafe",
    "ushort",
    "using",
    "virtual",
    "void",
    "volatile",
    "while",
}


def escape_identifier(name: str) -> str:
    return f"@{name}" if name in CS_RESERVED_KEYWORDS else name


class CSharpModelClassRenderer(ClassRenderer):
    """C# model class renderer."""

    LANGUAGE = "cs"
    TEMPLATE_LANG = "cs"
    FILE_EXTENSION = "cs"

    TYPE_MAP = {
        ARRAY_TYPE: "List<object>",
        STRING_TYPE: "string",
        INTEGER_TYPE: "int",
        NUMBER_TYPE: "float",
    }

    PROJECT_TEMPLATES = {
        "README.md": "README.md.jinja2",
        "Models.csproj": "Models.csproj.jinja2",
    }

    SOURCE_DIR = "Models"

    def render_preamble_block(self, class_def: ClassDef) -> str:
        return self.render_generation_comment("//")

    def get_class_access_modifiers(self, class_def: ClassDef) -> list[str]:
        return ["public"]

    def render_class_file_name(self, class_def: ClassDef) -> str:
        return f"{class_def.name}.cs"

    def get_namespace(self, type_ref: TypeRef) -> str:
        return type_ref.package_name.replace("\\", ".")

    def render_namespace_block(self, class_def: ClassDef) -> str:
        return f"namespace {self.get_namespace(class_def.type)};"

    def render_uses_block(self, class_def: ClassDef) -> str:
        """Using directives: framework namespaces first, then namespaces of referenced classes.

        Subclasses count as referenced since the superclass names them in its
        attributes. Classes living in the same namespace need no directive.
        """
        uses: OrderedSet[str] = OrderedSet()
        if any(v.type.is_built_in and v.type.name == ARRAY_TYPE for v in class_def.own_instance_variables):
            uses.add("using System.Collections.Generic;")
        if class_def.subclasses:
            uses.add("using JsonSubTypes;")
            uses.add("using Newtonsoft.Json;")

        own_namespace = self.get_namespace(class_def.type)
        referenced = [*self.collect_used_types(class_def), *(subclass.type for subclass in class_def.subclasses)]
        for type_ref in referenced:
            namespace = self.get_namespace(type_ref)
            if namespace != own_namespace:
                uses.add(f"using {namespace};")
        return "\n".join(uses)

    def render_class_comment_block(self, class_def: ClassDef) -> str:
        return ""

    def render_class_annotations_block(self, class_def: ClassDef) -> str:
        discriminator = self.get_dispatch_discriminator(class_def)
        if discriminator is None:
            return ""
        attributes = [f'[JsonConverter(typeof(JsonSubtypes), "{discriminator}")]']
        attributes.extend(f'[JsonSubtypes.KnownSubType(typeof({subclass.type.name}), "{subclass.discriminator_value}")]' for subclass in class_def.subclasses)
        return "\n".join(attributes)

    def render_extends_clause(self, class_def: ClassDef) -> str:
        if class_def.extends_user_defined_super_class():
            return f": {class_def.super_class.name}"
        return ""

    def render_instance_variables_block(self, class_def: ClassDef) -> str:
        return "\n".join(
            f"{INDENT}{variable.accessibility.value} {self.render_variable_type(variable)} {escape_identifier(variable.name)};"
            for variable in class_def.own_instance_variables
        )

    def parameter_names(self, class_def: ClassDef) -> list[str]:
        """Constructor parameter names, camelCase unless two fields would share one."""
        candidates = [lower_case_first(v.name) for v in class_def.own_instance_variables]
        return [
            escape_identifier(variable.name if candidates.count(candidate) > 1 else candidate)
            for variable, candidate in zip(class_def.own_instance_variables, candidates)
        ]

    def render_constructor_block(self, class_def: ClassDef) -> str:
        """Parameterless constructor (for the serializer and subclasses) plus a field constructor."""
        empty_constructor = f"{INDENT}public {class_def.name}()\n{INDENT}{{\n{INDENT}}}"
        variables = class_def.own_instance_variables
        if not variables:
            return empty_constructor

        parameter_names = self.parameter_names(class_def)
        parameters = ", ".join(f"{self.render_variable_type(v)} {name}" for v, name in zip(variables, parameter_names))
        lines = [f"{INDENT}public {class_def.name}({parameters})", f"{INDENT}{{"]
        lines.extend(f"{INDENT * 2}this.{escape_identifier(v.name)} = {name};" for v, name in zip(variables, parameter_names))
        lines.append(f"{INDENT}}}")
        return empty_constructor + "\n\n" + "\n".join(lines)

    def render_accessors_block(self, class_def: ClassDef) -> str:
        return "\n\n".join(self.render_property_block(class_def, variable) for variable in class_def.own_instance_variables if variable.is_private)

    def property_name(self, class_def: ClassDef, variable: InstanceVariable) -> str:
        name = upper_case_first(variable.name)
        if name in (variable.name, class_def.name):
            # Property must differ from both the field and the enclosing class
            name = f"{name}Value"
        return escape_identifier(name)

    def render_property_block(self, class_def: ClassDef, variable: InstanceVariable) -> str:
        field_name = f"this.{escape_identifier(variable.name)}"
        return "\n".join(
            [
                f"{INDENT}public {self.render_variable_type(variable)} {self.property_name(class_def, variable)}",
                f"{INDENT}{{",
                f"{INDENT * 2}get => {field_name};",
                f"{INDENT * 2}set => {field_name} = value;",
                f"{INDENT}}}",
            ]
        )
