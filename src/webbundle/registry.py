"""Ordered bundle registry and build pass orchestration."""

from __future__ import annotations

from dataclasses import dataclass, field

from webbundle.bundle import ResourceBundle
from webbundle.config import BundleDefinition, EngineConfig
from webbundle.fingerprint import content_fingerprint
from webbundle.logging import JsonlBuildLogger
from webbundle.readers import PrefixGeneratorRegistry, ResourceNotFoundError
from webbundle.readers.base import GeneratorRegistry, ResourceReader
from webbundle.resolver import BundleMappingError, SortFileReadError


@dataclass(slots=True)
class BundleRegistry:
    """In-memory bundle registry preserving declaration order."""

    _bundles: dict[str, ResourceBundle] = field(default_factory=dict)
    _logger: JsonlBuildLogger | None = None

    def register(self, bundle: ResourceBundle) -> None:
        """Register a bundle by name; names must be unique."""
        if bundle.name in self._bundles:
            raise ValueError(f"Bundle '{bundle.name}' is already registered.")
        self._bundles[bundle.name] = bundle

    def get(self, name: str) -> ResourceBundle | None:
        """Return a bundle by name."""
        return self._bundles.get(name)

    def names(self) -> tuple[str, ...]:
        """Return registered bundle names in declaration order."""
        return tuple(self._bundles.keys())

    def bundles(self) -> tuple[ResourceBundle, ...]:
        return tuple(self._bundles.values())

    def global_bundles(self) -> tuple[ResourceBundle, ...]:
        """Return global bundles by inclusion order, ties kept in declaration order."""
        globals_ = [bundle for bundle in self._bundles.values() if bundle.inclusion.global_bundle]
        return tuple(sorted(globals_, key=lambda bundle: bundle.inclusion.inclusion_order))

    def find_bundle_for_path(self, path: str) -> ResourceBundle | None:
        """Return the first bundle, in declaration order, that contains the path."""
        for bundle in self._bundles.values():
            if bundle.belongs_to_bundle(path):
                return bundle
        return None

    def fingerprint_all(self, reader: ResourceReader) -> dict[str, str]:
        """Hash every bundle and each of its variant keys; return primary hashes."""
        primaries: dict[str, str] = {}
        for bundle in self._bundles.values():
            try:
                primary = content_fingerprint(
                    reader, bundle.production_paths, generators=bundle.generators
                )
                bundle.set_fingerprint(None, primary)
                for variant_key in bundle.variant_keys:
                    context = bundle.variant_context(variant_key)
                    bundle.set_fingerprint(
                        variant_key,
                        content_fingerprint(
                            reader,
                            bundle.production_paths_for(context),
                            generators=bundle.generators,
                        ),
                    )
            except ResourceNotFoundError as exc:
                self.record_event(
                    bundle.name,
                    "fingerprint",
                    ok=False,
                    error_code="RESOURCE_NOT_FOUND",
                    metadata={"path": exc.path},
                )
                raise
            self.record_event(
                bundle.name,
                "fingerprint",
                metadata={"fingerprint": primary, "variant_count": len(bundle.variant_keys)},
            )
            primaries[bundle.name] = primary
        return primaries

    def snapshot(self) -> dict[str, object]:
        """Return a JSON-ready view of every bundle in declaration order."""
        payload: dict[str, object] = {}
        for bundle in self._bundles.values():
            payload[bundle.name] = {
                "id": bundle.id,
                "global": bundle.inclusion.global_bundle,
                "order": bundle.inclusion.inclusion_order,
                "mappings": list(bundle.mappings),
                "production_paths": [entry.path for entry in bundle.production_paths],
                "debug_paths": [entry.path for entry in bundle.debug_paths],
                "licenses": sorted(bundle.licenses),
                "variant_keys": list(bundle.variant_keys),
                "dependencies": [dependency.name for dependency in bundle.dependencies],
                "fingerprint": bundle.get_fingerprint(),
                "variant_fingerprints": bundle.variant_fingerprints(),
            }
        return payload

    def record_event(
        self,
        bundle: str,
        action: str,
        *,
        ok: bool = True,
        error_code: str | None = None,
        metadata: dict[str, object] | None = None,
    ) -> None:
        if self._logger is None:
            return
        self._logger.record(bundle, action, ok=ok, error_code=error_code, metadata=metadata)


def build_generator_registry(config: EngineConfig) -> PrefixGeneratorRegistry:
    """Register configured generator prefixes in declaration order."""
    generators = PrefixGeneratorRegistry()
    for prefix, axes in config.generators:
        generators.register(prefix, axes)
    return generators


def build_registry(
    config: EngineConfig,
    reader: ResourceReader,
    generators: GeneratorRegistry | None = None,
    logger: JsonlBuildLogger | None = None,
) -> BundleRegistry:
    """Resolve every configured bundle and wire dependencies by name."""
    registry = BundleRegistry(_logger=logger)
    registry_generators = generators if generators is not None else build_generator_registry(config)
    for definition in config.bundles:
        registry.register(_build_bundle(registry, definition, config, reader, registry_generators))
    for definition in config.bundles:
        bundle = registry.get(definition.name)
        if bundle is None:
            continue
        dependencies: list[ResourceBundle] = []
        for dependency_name in definition.dependencies:
            dependency = registry.get(dependency_name)
            if dependency is None:
                raise ValueError(
                    f"Bundle '{definition.name}' depends on unknown bundle '{dependency_name}'."
                )
            dependencies.append(dependency)
        bundle.set_dependencies(dependencies)
    return registry


def _build_bundle(
    registry: BundleRegistry,
    definition: BundleDefinition,
    config: EngineConfig,
    reader: ResourceReader,
    generators: GeneratorRegistry,
) -> ResourceBundle:
    try:
        bundle = ResourceBundle(
            bundle_id=definition.bundle_id,
            name=definition.name,
            reader=reader,
            generators=generators,
            file_extension=definition.file_extension,
            mappings=definition.mappings,
            bundle_prefix=definition.prefix,
            inclusion=definition.inclusion,
            variant_sets=definition.variant_sets,
            sort_file_name=config.resources.sort_file_name,
            licenses_file_name=config.resources.licenses_file_name,
        )
    except BundleMappingError as exc:
        registry.record_event(
            definition.name,
            "resolve",
            ok=False,
            error_code="MAPPING_ERROR",
            metadata={"mapping": exc.mapping},
        )
        raise
    except SortFileReadError as exc:
        registry.record_event(
            definition.name,
            "resolve",
            ok=False,
            error_code="SORT_FILE_ERROR",
            metadata={"path": exc.path},
        )
        raise
    registry.record_event(
        definition.name,
        "resolve",
        metadata={
            "mapping_count": len(definition.mappings),
            "production_path_count": len(bundle.production_paths),
            "debug_path_count": len(bundle.debug_paths),
            "license_count": len(bundle.licenses),
        },
    )
    return bundle
