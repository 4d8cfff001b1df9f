"""Collaborator protocols consumed by the resolution engine."""

from __future__ import annotations

from typing import Protocol, TextIO


class ResourceNotFoundError(FileNotFoundError):
    """Raised when a reader cannot supply the requested resource."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Resource not found: {path}")
        self.path = path


class ResourceReader(Protocol):
    """Read-only access to the resources a bundle is built from."""

    def list_resources(self, dir_path: str) -> tuple[str, ...]:
        """Return child names of a directory in the reader's listing order."""

    def is_directory(self, path: str) -> bool:
        """Return True when the path names a directory."""

    def open_resource(self, path: str) -> TextIO:
        """Open a resource as text or raise ResourceNotFoundError."""

    def read_bytes(self, path: str) -> bytes:
        """Return raw resource content or raise ResourceNotFoundError."""


class GeneratorRegistry(Protocol):
    """Recognizes synthetic resource paths and the variant axes they react to."""

    def is_generated_path(self, path: str) -> bool:
        """Return True when the path is produced by a generator."""

    def supported_variant_axes(self, path: str) -> frozenset[str]:
        """Return variant axis names the generator supports for the path."""
