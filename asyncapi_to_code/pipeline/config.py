"""
Configuration for the code generator pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .errors import ConfigError

ACCESSIBILITY_VALUES = ("public", "protected", "private")


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when an output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        atomic_write: Whether to write through a temporary file
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    atomic_write: bool = True


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Namespace/package assigned to every generated model class
    models_namespace: str = "App\\Models"

    # Namespace for services, only used by the README
    services_namespace: str = "App\\Services"

    # Server described in the README (empty = first server of the document)
    server: str = ""

    # Accessibility for properties without x-accessibility
    default_accessibility: str = "private"

    # Add generation comment at top of each file
    add_generation_comment: bool = True

    # Command line recorded in the generation comment
    generation_command: str = "asyncapi_to_code"

    output: OutputConfig = field(default_factory=OutputConfig)

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Check values that would otherwise fail deep inside the pipeline."""
        if self.default_accessibility not in ACCESSIBILITY_VALUES:
            raise ConfigError(f"default_accessibility must be one of {', '.join(ACCESSIBILITY_VALUES)}, got {self.default_accessibility!r}")
        if not self.models_namespace:
            raise ConfigError("models_namespace must not be empty")
        if isinstance(self.output.mode, str):
            try:
                self.output.mode = OutputMode(self.output.mode)
            except ValueError as e:
                raise ConfigError(f"Unknown output mode: {self.output.mode!r}") from e

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary, ignoring unknown keys."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "output":
                config.output = OutputConfig(**v) if isinstance(v, dict) else v
            elif hasattr(config, k):
                setattr(config, k, v)
        config.validate()
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "models_namespace": self.models_namespace,
            "services_namespace": self.services_namespace,
            "server": self.server,
            "default_accessibility": self.default_accessibility,
            "add_generation_comment": self.add_generation_comment,
            "generation_command": self.generation_command,
            "output": {
                "mode": self.output.mode.value,
                "atomic_write": self.output.atomic_write,
            },
        }
