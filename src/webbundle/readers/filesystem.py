"""Resource reader backed by a directory tree on disk."""

from __future__ import annotations

import io
import os
from pathlib import Path
from typing import TextIO

from webbundle.paths import normalize_path
from webbundle.readers.base import ResourceNotFoundError


class FileSystemResourceReader:
    """Serve bundle paths relative to a resource root directory."""

    def __init__(self, root: Path, encoding: str = "utf-8") -> None:
        self._root = root.resolve()
        self._encoding = encoding

    @property
    def root(self) -> Path:
        """Return the resolved resource root."""
        return self._root

    def list_resources(self, dir_path: str) -> tuple[str, ...]:
        """List immediate children sorted by name; missing directories are empty."""
        directory = self._full_path(dir_path)
        try:
            with os.scandir(directory) as entries:
                return tuple(sorted(entry.name for entry in entries))
        except OSError:
            return ()

    def is_directory(self, path: str) -> bool:
        return self._full_path(path).is_dir()

    def open_resource(self, path: str) -> TextIO:
        full_path = self._full_path(path)
        if not full_path.is_file():
            raise ResourceNotFoundError(path)
        return io.StringIO(full_path.read_text(encoding=self._encoding))

    def read_bytes(self, path: str) -> bytes:
        full_path = self._full_path(path)
        if not full_path.is_file():
            raise ResourceNotFoundError(path)
        return full_path.read_bytes()

    def _full_path(self, path: str) -> Path:
        relative = normalize_path(path)
        if not relative:
            return self._root
        return self._root / Path(*relative.split("/"))
