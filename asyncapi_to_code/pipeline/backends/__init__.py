"""
Class rendering backends.

Contains the renderer contract and one renderer per target language.
"""

from __future__ import annotations

from ..config import CodeGeneratorConfig
from ..errors import UnsupportedLanguageError
from .base import ClassRenderer
from .csharp_backend import CSharpModelClassRenderer
from .php_backend import PhpModelClassRenderer

RENDERERS: dict[str, type[ClassRenderer]] = {
    PhpModelClassRenderer.LANGUAGE: PhpModelClassRenderer,
    CSharpModelClassRenderer.LANGUAGE: CSharpModelClassRenderer,
}


def list_supported_languages() -> list[str]:
    return sorted(RENDERERS)


def get_renderer(language: str, config: CodeGeneratorConfig | None = None) -> ClassRenderer:
    """
    Create the renderer for a target language.

    Raises:
        UnsupportedLanguageError: If no renderer is registered for the language
    """
    try:
        renderer_class = RENDERERS[language]
    except KeyError:
        raise UnsupportedLanguageError(f"Language not supported: {language} (supported: {', '.join(list_supported_languages())})") from None
    return renderer_class(config)


__all__ = [
    "ClassRenderer",
    "PhpModelClassRenderer",
    "CSharpModelClassRenderer",
    "RENDERERS",
    "get_renderer",
    "list_supported_languages",
]
