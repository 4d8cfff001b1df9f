"""Variant key selection and variant-specific path rewriting."""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Mapping, Sequence

from webbundle.readers.base import GeneratorRegistry
from webbundle.resolver.models import ResourcePath
from webbundle.variants.models import VARIANT_PATH_SEPARATOR, VARIANT_SEPARATOR, VariantSet

VariantContext = Mapping[str, str | None]


def variant_path_name(path: str, variant_key: str, generated: bool) -> str:
    """Return the variant-specific name of a path.

    Generated paths get ``@key`` appended; plain files get it before the extension.
    """
    if not variant_key:
        return path
    dot = path.rfind(".")
    slash = path.rfind("/")
    if generated or dot <= slash:
        return f"{path}{VARIANT_PATH_SEPARATOR}{variant_key}"
    return f"{path[:dot]}{VARIANT_PATH_SEPARATOR}{variant_key}{path[dot:]}"


def all_variant_keys(variant_sets: Sequence[VariantSet]) -> tuple[str, ...]:
    """Enumerate variant keys of the cross product in declaration order.

    The combination made only of defaults is the no-variant case and is skipped.
    """
    if not variant_sets:
        return ()
    defaults = tuple(variant_set.default for variant_set in variant_sets)
    keys: list[str] = []
    for combination in itertools.product(*(variant_set.values for variant_set in variant_sets)):
        if combination == defaults:
            continue
        keys.append(VARIANT_SEPARATOR.join(combination))
    return tuple(keys)


class VariantResolver:
    """Select variant keys for a bundle and rewrite generated resource paths."""

    def __init__(
        self,
        generators: GeneratorRegistry,
        variant_sets: Iterable[VariantSet] = (),
    ) -> None:
        ordered = tuple(variant_sets)
        axes = [variant_set.axis for variant_set in ordered]
        if len(set(axes)) != len(axes):
            raise ValueError("Variant axes must be declared at most once per bundle.")
        self._generators = generators
        self._variant_sets = ordered
        self._sets_by_axis = {variant_set.axis: variant_set for variant_set in ordered}
        self._variant_keys = all_variant_keys(ordered)

    @property
    def variant_sets(self) -> tuple[VariantSet, ...]:
        return self._variant_sets

    @property
    def variant_keys(self) -> tuple[str, ...]:
        return self._variant_keys

    def select_bundle_variant_key(self, requested: VariantContext | None) -> str | None:
        """Return the most specific declared key for the request, or None."""
        if not requested or not self._variant_sets:
            return None
        if not any(variant_set.axis in requested for variant_set in self._variant_sets):
            return None
        values = tuple(
            variant_set.best_match(requested.get(variant_set.axis))
            for variant_set in self._variant_sets
        )
        if values == tuple(variant_set.default for variant_set in self._variant_sets):
            return None
        return VARIANT_SEPARATOR.join(values)

    def context_for_key(self, variant_key: str) -> dict[str, str]:
        """Map a declared variant key back to an axis -> value context."""
        if variant_key not in self._variant_keys:
            raise KeyError(variant_key)
        values = variant_key.split(VARIANT_SEPARATOR)
        return {
            variant_set.axis: value
            for variant_set, value in zip(self._variant_sets, values, strict=True)
        }

    def resolve_variant_paths(
        self,
        base_paths: tuple[ResourcePath, ...],
        requested: VariantContext | None,
    ) -> tuple[ResourcePath, ...]:
        """Rewrite generated paths to their variant-specific names."""
        if not requested:
            return base_paths
        resolved: list[ResourcePath] = []
        for entry in base_paths:
            if self._generators.is_generated_path(entry.path):
                axes = self._generators.supported_variant_axes(entry.path)
                key = self._resource_variant_key(requested, axes)
                if key:
                    resolved.append(
                        ResourcePath(
                            path=variant_path_name(entry.path, key, generated=True),
                            bundle_prefix=entry.bundle_prefix,
                        )
                    )
                    continue
            resolved.append(entry)
        return tuple(resolved)

    def _resource_variant_key(self, requested: VariantContext, axes: frozenset[str]) -> str | None:
        """Compose a generated resource's key from the axes its generator supports.

        Declared axes come first in declaration order, so the key matches the
        bundle key when the generator supports every declared axis. Requested
        axes the bundle does not declare follow, sorted by name.
        """
        if not any(axis in requested for axis in axes):
            return None
        values: list[str] = []
        defaults: list[str] = []
        for variant_set in self._variant_sets:
            if variant_set.axis in axes:
                values.append(variant_set.best_match(requested.get(variant_set.axis)))
                defaults.append(variant_set.default)
        for axis in sorted(axis for axis in axes if axis not in self._sets_by_axis):
            if axis in requested:
                values.append(requested[axis] or "")
                defaults.append("")
        if values == defaults:
            return None
        return VARIANT_SEPARATOR.join(values)
