"""Prefix-based generator registry with deterministic lookup."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(slots=True)
class PrefixGeneratorRegistry:
    """Recognize generated paths by registered prefix, e.g. ``messages:``.

    Prefixes are matched in registration order; the first match wins.
    """

    _axes_by_prefix: dict[str, frozenset[str]] = field(default_factory=dict)

    def register(self, prefix: str, variant_axes: Iterable[str] = ()) -> None:
        """Register a generator prefix and the variant axes it reacts to."""
        if not prefix:
            raise ValueError("Generator prefix must be non-empty.")
        self._axes_by_prefix[prefix] = frozenset(variant_axes)

    def prefixes(self) -> tuple[str, ...]:
        """Return registered prefixes in registration order."""
        return tuple(self._axes_by_prefix.keys())

    def is_generated_path(self, path: str) -> bool:
        return self._match(path) is not None

    def supported_variant_axes(self, path: str) -> frozenset[str]:
        prefix = self._match(path)
        if prefix is None:
            return frozenset()
        return self._axes_by_prefix[prefix]

    def _match(self, path: str) -> str | None:
        candidate = path.lstrip("/")
        for prefix in self._axes_by_prefix:
            if candidate.startswith(prefix):
                return prefix
        return None
