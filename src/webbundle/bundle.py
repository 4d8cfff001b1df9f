"""Resource bundle: resolved membership, variants, fingerprints and dependencies."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from webbundle.fingerprint import FingerprintStore
from webbundle.paths import as_dir_path, as_path
from webbundle.readers.base import GeneratorRegistry, ResourceReader
from webbundle.resolver import (
    DEFAULT_LICENSES_FILE_NAME,
    DEFAULT_SORT_FILE_NAME,
    InclusionPolicy,
    PathMappingResolver,
    ResolvedPaths,
    ResourcePath,
)
from webbundle.variants import VariantContext, VariantResolver, VariantSet


class ResourceBundle:
    """A named, ordered collection of resources served as one unit.

    Resolution results are held in one immutable ``ResolvedPaths`` snapshot.
    Re-mapping builds a new snapshot and swaps the reference only once the pass
    succeeded, so concurrent readers see either the old or the new lists.
    """

    def __init__(
        self,
        *,
        bundle_id: str,
        name: str,
        reader: ResourceReader,
        generators: GeneratorRegistry,
        file_extension: str | None,
        mappings: Sequence[str] | None = None,
        bundle_prefix: str | None = None,
        inclusion: InclusionPolicy | None = None,
        variant_sets: Iterable[VariantSet] = (),
        sort_file_name: str = DEFAULT_SORT_FILE_NAME,
        licenses_file_name: str = DEFAULT_LICENSES_FILE_NAME,
    ) -> None:
        self._name = name
        self._generators = generators
        self._id = bundle_id if generators.is_generated_path(bundle_id) else as_path(bundle_id)
        self._bundle_prefix = as_dir_path(bundle_prefix) if bundle_prefix else None
        self._inclusion = inclusion or InclusionPolicy()
        self._resolver = PathMappingResolver(
            bundle_name=name,
            reader=reader,
            generators=generators,
            file_extension=file_extension,
            bundle_prefix=self._bundle_prefix,
            inclusion=self._inclusion,
            sort_file_name=sort_file_name,
            licenses_file_name=licenses_file_name,
        )
        self._variants = VariantResolver(generators, variant_sets)
        self._fingerprints = FingerprintStore(bundle_name=name)
        self._resolved = ResolvedPaths()
        self._dependencies: tuple[ResourceBundle, ...] = ()
        if mappings is not None:
            self.set_mappings(mappings)

    def __repr__(self) -> str:
        return f"ResourceBundle(id={self._id!r}, name={self._name!r})"

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def bundle_prefix(self) -> str | None:
        return self._bundle_prefix

    @property
    def file_extension(self) -> str:
        return self._resolver.file_extension

    @property
    def generators(self) -> GeneratorRegistry:
        return self._generators

    @property
    def inclusion(self) -> InclusionPolicy:
        return self._inclusion

    @property
    def is_composite(self) -> bool:
        return False

    @property
    def mappings(self) -> tuple[str, ...]:
        return self._resolved.mappings

    def set_mappings(self, mappings: Sequence[str]) -> None:
        """Resolve mappings from scratch and publish the new snapshot."""
        self._resolved = self._resolver.resolve(mappings)

    @property
    def resolved(self) -> ResolvedPaths:
        """Return the current snapshot; hold on to it to iterate consistently."""
        return self._resolved

    @property
    def production_paths(self) -> tuple[ResourcePath, ...]:
        return self._resolved.production_paths

    @property
    def debug_paths(self) -> tuple[ResourcePath, ...]:
        return self._resolved.debug_paths

    @property
    def licenses(self) -> frozenset[str]:
        return self._resolved.licenses

    def production_paths_for(self, variants: VariantContext | None) -> tuple[ResourcePath, ...]:
        """Production paths rewritten for a variant context."""
        return self._variants.resolve_variant_paths(self._resolved.production_paths, variants)

    def debug_paths_for(self, variants: VariantContext | None) -> tuple[ResourcePath, ...]:
        """Debug paths rewritten for a variant context.

        A bundle with a static debug URL serves its debug list as declared.
        """
        if self._inclusion.debug_url:
            return self._resolved.debug_paths
        return self._variants.resolve_variant_paths(self._resolved.debug_paths, variants)

    def serving_paths(
        self, debug: bool, variants: VariantContext | None = None
    ) -> tuple[ResourcePath, ...]:
        """Return the list served in the given mode, in bundle order."""
        if debug:
            return self.debug_paths_for(variants)
        return self.production_paths_for(variants)

    def belongs_to_bundle(self, path: str) -> bool:
        """Return True when the path was resolved into either path list.

        Plain paths are normalized before the exact comparison; generated
        paths are compared as given. Prefixes and patterns never match.
        """
        candidate = path if self._generators.is_generated_path(path) else as_path(path)
        snapshot = self._resolved
        for entry in snapshot.production_paths:
            if entry.path == candidate:
                return True
        for entry in snapshot.debug_paths:
            if entry.path == candidate:
                return True
        return False

    @property
    def variant_sets(self) -> tuple[VariantSet, ...]:
        return self._variants.variant_sets

    @property
    def variant_keys(self) -> tuple[str, ...]:
        return self._variants.variant_keys

    def set_variants(self, variant_sets: Iterable[VariantSet]) -> None:
        self._variants = VariantResolver(self._generators, variant_sets)

    def select_variant_key(self, variants: VariantContext | None) -> str | None:
        return self._variants.select_bundle_variant_key(variants)

    def variant_context(self, variant_key: str) -> dict[str, str]:
        return self._variants.context_for_key(variant_key)

    def set_fingerprint(self, variant_key: str | None, fingerprint: str) -> None:
        self._fingerprints.set_fingerprint(variant_key, fingerprint)

    def get_fingerprint(self, variant_key: str | None = None) -> str | None:
        return self._fingerprints.get_fingerprint(variant_key)

    def variant_fingerprints(self) -> dict[str, str]:
        return self._fingerprints.variant_fingerprints()

    def url_prefix(self, variants: VariantContext | None = None) -> str:
        """Return the cache-busting URL prefix for a variant context.

        Raises FingerprintNotReadyError when the primary hash was never set.
        """
        return self._fingerprints.url_prefix(self._variants.select_bundle_variant_key(variants))

    @property
    def dependencies(self) -> tuple[ResourceBundle, ...]:
        return self._dependencies

    def set_dependencies(self, dependencies: Iterable[ResourceBundle]) -> None:
        """Store declared dependencies verbatim; ordering is the caller's concern."""
        self._dependencies = tuple(dependencies)
