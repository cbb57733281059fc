"""
Exceptions raised by the generation pipeline.

Model errors are raised by the evaluator and abort the run before any
rendering happens. Render errors are raised by backends and the driver.
"""

from __future__ import annotations


class AsyncApiToCodeError(Exception):
    """Base class for every error raised by the generator."""


class ConfigError(AsyncApiToCodeError):
    """Raised when a configuration value is invalid."""


class DocumentError(AsyncApiToCodeError):
    """Raised when the AsyncAPI document is missing a structure the generator needs."""


class ModelError(AsyncApiToCodeError):
    """Raised when the schema components cannot form a valid class model.

    Attributes:
        class_name: Schema component the error was found in
        field_name: Property the error was found in, if any
    """

    def __init__(self, message: str, class_name: str | None = None, field_name: str | None = None):
        self.class_name = class_name
        self.field_name = field_name
        location = ""
        if class_name and field_name:
            location = f"{class_name}.{field_name}: "
        elif class_name:
            location = f"{class_name}: "
        super().__init__(location + message)


class SchemaStructureError(ModelError):
    """A schema component lacks a structure required to build a class."""


class UnresolvedTypeError(ModelError):
    """A field type is neither a built-in type nor a known schema component."""


class CyclicInheritanceError(ModelError):
    """A class transitively extends itself."""


class DuplicateClassError(ModelError):
    """Two schema components resolve to the same package and class name."""


class DiscriminatorError(ModelError):
    """The superclass of a polymorphic class does not have exactly one discriminator."""


class MissingDiscriminatorError(DiscriminatorError):
    """The superclass declares no discriminator instance variable."""


class AmbiguousDiscriminatorError(DiscriminatorError):
    """The superclass declares more than one discriminator instance variable."""


class RenderError(AsyncApiToCodeError):
    """Raised when a backend cannot render the class model."""


class UnmappedTypeError(RenderError):
    """A built-in type has no mapping in the active backend."""


class DuplicateFilePathError(RenderError):
    """Two classes render to the same output path."""


class UnsupportedLanguageError(RenderError):
    """No backend is registered for the requested language."""


class GenerationError(AsyncApiToCodeError):
    """Raised when one or more classes failed to render.

    Attributes:
        failures: The per-class failures that were collected
    """

    def __init__(self, failures):
        self.failures = tuple(failures)
        details = "; ".join(f"{failure.class_name}: {failure.error}" for failure in self.failures)
        super().__init__(f"{len(self.failures)} class(es) failed to render: {details}")
