"""
Output writing for generated artifacts.
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter, resolve_output_path, write_artifacts

__all__ = [
    "AtomicWriter",
    "resolve_output_path",
    "write_artifacts",
]
