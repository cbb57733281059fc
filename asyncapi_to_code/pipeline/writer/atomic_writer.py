"""
Atomic file writer for generated artifacts.

Ensures that file writes are atomic to prevent half-written files
from interrupted operations.
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Iterable
from pathlib import Path

from ..config import OutputConfig, OutputMode

logger = logging.getLogger(__name__)


class AtomicWriter:
    """Handles atomic file writes.

    Uses a two-phase approach:
    1. Write to a temporary file in the same directory
    2. Atomically replace the target file

    This ensures that an interrupted write operation never leaves
    the target file in an incomplete state.
    """

    def write(self, path: Path, content: str) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write

        Raises:
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
            temp_path.replace(path)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise

    def write_if_not_exists(self, path: Path, content: str) -> None:
        """Write content only if the file doesn't exist.

        Raises:
            FileExistsError: If the file already exists
        """
        if path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")
        self.write(path, content)


def resolve_output_path(root: Path, relative_path: str) -> Path:
    """Join an artifact path to the output root, refusing paths that escape it."""
    root = root.resolve()
    path = (root / relative_path).resolve()
    if not path.is_relative_to(root):
        raise ValueError(f"Artifact path escapes the output directory: {relative_path}")
    return path


def write_artifacts(root: Path, artifacts: Iterable, output: OutputConfig | None = None) -> list[Path]:
    """
    Write artifacts under an output directory.

    Every target is checked before anything is written, so an existing
    file in ERROR_IF_EXISTS mode leaves the directory untouched.

    Args:
        root: Output directory
        artifacts: Objects with ``path`` and ``content`` attributes
        output: Output configuration

    Returns:
        Written paths, in artifact order
    """
    output = output or OutputConfig()
    targets = [(resolve_output_path(root, artifact.path), artifact.content) for artifact in artifacts]

    if output.mode == OutputMode.ERROR_IF_EXISTS:
        existing = [str(path) for path, _ in targets if path.exists()]
        if existing:
            raise FileExistsError(f"Output files already exist: {', '.join(existing)}. Use force mode to overwrite.")

    writer = AtomicWriter()
    written = []
    for path, content in targets:
        if output.atomic_write:
            writer.write(path, content)
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        written.append(path)
        logger.debug("Wrote %s", path)

    logger.info("Wrote %d file(s) under %s", len(written), root)
    return written
