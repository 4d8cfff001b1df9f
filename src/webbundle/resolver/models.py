"""Typed models for resolved bundle membership."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class ResourcePath:
    """One resolved bundle member; ``path`` is what membership checks compare."""

    path: str
    bundle_prefix: str | None = None

    @property
    def url_path(self) -> str:
        """Return the path with the bundle prefix applied."""
        if not self.bundle_prefix:
            return self.path
        return self.bundle_prefix.rstrip("/") + "/" + self.path.lstrip("/")


@dataclass(slots=True, frozen=True)
class InclusionPolicy:
    """Per-bundle inclusion flags."""

    global_bundle: bool = False
    inclusion_order: int = 0
    debug_only: bool = False
    debug_never: bool = False
    ie_conditional_expression: str | None = None
    alternate_production_url: str | None = None
    debug_url: str | None = None


@dataclass(slots=True, frozen=True)
class ResolvedPaths:
    """Immutable snapshot produced by one resolution pass."""

    production_paths: tuple[ResourcePath, ...] = ()
    debug_paths: tuple[ResourcePath, ...] = ()
    licenses: frozenset[str] = frozenset()
    mappings: tuple[str, ...] = ()
