"""Scratch files passing intermediate audio between stages."""

from __future__ import annotations

import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path

from ..config.constants import DEFAULT_SCRATCH_SUBDIRECTORY
from .base import FilesystemError

LOG = logging.getLogger(__name__)


@dataclass
class ScratchHandle:
    """Single owner of one scratch file created during a run."""

    path: Path
    removed: bool = False

    def remove(self) -> None:
        """Delete the scratch file. Removing twice is a no-op."""
        if self.removed:
            return
        try:
            self.path.unlink()
        except OSError as e:
            msg = f"Failed to remove scratch file {self.path}: {e}"
            raise FilesystemError(msg, file_path=self.path, cause=e) from e
        self.removed = True
        LOG.debug("Removed scratch file: %s", self.path)


class TemporaryArtifactManager:
    """
    Computes, creates and removes scratch files.

    Paths are deterministic: ``<root>/<subdirectory>/<input base name>``. Two
    concurrent runs on inputs sharing a base name use the same file, so callers
    must serialize such runs.
    """

    def __init__(self, root: Path | None = None, subdirectory: str = DEFAULT_SCRATCH_SUBDIRECTORY) -> None:
        self.root = Path(root) if root is not None else Path(tempfile.gettempdir())
        self.subdirectory = subdirectory

    @property
    def directory(self) -> Path:
        return self.root / self.subdirectory

    def scratch_path_for(self, input_path: str | Path) -> Path:
        """Scratch file path for the given input."""
        return self.directory / Path(input_path).name

    def ensure_dir(self) -> Path:
        """Create the scratch directory, including parents, if missing."""
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            msg = f"Failed to create scratch directory {self.directory}: {e}"
            raise FilesystemError(msg, file_path=self.directory, cause=e) from e
        return self.directory

    def handle_for(self, input_path: str | Path) -> ScratchHandle:
        return ScratchHandle(self.scratch_path_for(input_path))

    def remove(self, path: str | Path) -> None:
        """Delete a scratch file."""
        ScratchHandle(Path(path)).remove()
