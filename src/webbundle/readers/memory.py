"""Dictionary-backed resource reader."""

from __future__ import annotations

import io
from collections.abc import Mapping
from typing import TextIO

from webbundle.paths import as_path, normalize_path
from webbundle.readers.base import ResourceNotFoundError


class InMemoryResourceReader:
    """Reader over a ``{path: content}`` mapping.

    Directories are implied by the file paths. Listings follow the insertion
    order of the mapping, which lets callers model any reader listing order.
    Keys that do not look like plain paths (generated ones such as
    ``messages:app``) are stored verbatim.
    """

    def __init__(self, files: Mapping[str, str | bytes] | None = None) -> None:
        self._files: dict[str, bytes] = {}
        self._children: dict[str, list[str]] = {"": []}
        for path, content in (files or {}).items():
            self.add(path, content)

    def add(self, path: str, content: str | bytes) -> None:
        """Register a resource and every parent directory it implies."""
        data = content.encode("utf-8") if isinstance(content, str) else content
        if ":" in path:
            self._files[path] = data
            return
        relative = normalize_path(path)
        self._files[relative] = data
        self._link_parents(relative)

    def add_directory(self, path: str) -> None:
        """Register an empty directory."""
        relative = normalize_path(path)
        self._link_parents(relative)
        self._children.setdefault(relative, [])

    def _link_parents(self, relative: str) -> None:
        parent = ""
        for segment in relative.split("/"):
            children = self._children.setdefault(parent, [])
            if segment not in children:
                children.append(segment)
            parent = f"{parent}/{segment}" if parent else segment

    def list_resources(self, dir_path: str) -> tuple[str, ...]:
        return tuple(self._children.get(normalize_path(dir_path), ()))

    def is_directory(self, path: str) -> bool:
        relative = normalize_path(path)
        return relative in self._children and relative not in self._files

    def open_resource(self, path: str) -> TextIO:
        return io.StringIO(self.read_bytes(path).decode("utf-8"))

    def read_bytes(self, path: str) -> bytes:
        if path in self._files:
            return self._files[path]
        relative = normalize_path(path)
        if relative not in self._files:
            raise ResourceNotFoundError(as_path(path))
        return self._files[relative]
