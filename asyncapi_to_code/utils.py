"""
Utility functions for the AsyncAPI to Code generator.
"""

from __future__ import annotations

import re
from collections.abc import Hashable, Iterable, Iterator
from typing import Generic, TypeVar

# Runs of letters (any script) or of digits; camelCase runs stay whole since only first letters change case
_WORD_PATTERN = re.compile(r"[^\W\d_]+|\d+")

K = TypeVar("K", bound=Hashable)


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens, slashes, dots, angle brackets) to spaces."""
    return re.sub(r"[_\-/.<>{}\s]+", " ", text)


def _split_into_words(text: str) -> list[str]:
    """Split text into letter and digit words."""
    return _WORD_PATTERN.findall(text)


def snake_to_pascal_case(text: str) -> str:
    """Convert snake_case, camelCase, kebab-case or space-separated text to PascalCase.

    Words that are already capitalized keep their inner case, so acronyms
    survive a round trip through an already PascalCase name.

    Examples:
        "first_name" -> "FirstName"
        "actionTemplate" -> "ActionTemplate"
        "user-signed-up" -> "UserSignedUp"
        "Animal" -> "Animal"
        "café_crème" -> "CaféCrème"
        "first 3 rows" -> "First3Rows"

    Args:
        text: The text to convert

    Returns:
        PascalCase string
    """
    if not text:
        return ""
    words = _split_into_words(_normalize_separators(text))
    return "".join(upper_case_first(word) for word in words if word)


def upper_case_first(text: str) -> str:
    """Upper-case the first character, leave the rest untouched."""
    return text[:1].upper() + text[1:]


def lower_case_first(text: str) -> str:
    """Lower-case the first character, leave the rest untouched."""
    return text[:1].lower() + text[1:]


class OrderedSet(Generic[K]):
    """A set that remembers first-insertion order.

    Backed by a list for order and a set for membership, so iteration order
    never depends on hashing.
    """

    def __init__(self, items: Iterable[K] = ()):
        self._items: list[K] = []
        self._seen: set[K] = set()
        for item in items:
            self.add(item)

    def add(self, item: K) -> bool:
        """Add an item; return False if it was already present."""
        if item in self._seen:
            return False
        self._seen.add(item)
        self._items.append(item)
        return True

    def __contains__(self, item: object) -> bool:
        return item in self._seen

    def __iter__(self) -> Iterator[K]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"OrderedSet({self._items!r})"
