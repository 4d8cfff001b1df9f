"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from webbundle.resolver import DEFAULT_LICENSES_FILE_NAME, DEFAULT_SORT_FILE_NAME, InclusionPolicy
from webbundle.variants import VariantSet

CONFIG_FILE_NAME = "webbundle.toml"
DEFAULT_DATA_DIR_NAME = ".webbundle"

_BUNDLE_FIELDS = frozenset(
    {
        "id",
        "file_extension",
        "prefix",
        "mappings",
        "global",
        "order",
        "debug_only",
        "debug_never",
        "ie_expression",
        "alternate_production_url",
        "debug_url",
        "dependencies",
        "variants",
    }
)


@dataclass(slots=True, frozen=True)
class ResourcesConfig:
    """Where resources are read from and which marker files are recognized."""

    root: Path
    sort_file_name: str = DEFAULT_SORT_FILE_NAME
    licenses_file_name: str = DEFAULT_LICENSES_FILE_NAME


@dataclass(slots=True, frozen=True)
class BundleDefinition:
    """Declarative description of one bundle."""

    name: str
    bundle_id: str
    file_extension: str
    mappings: tuple[str, ...]
    prefix: str | None = None
    inclusion: InclusionPolicy = field(default_factory=InclusionPolicy)
    variant_sets: tuple[VariantSet, ...] = ()
    dependencies: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class EngineConfig:
    """Fully merged engine configuration."""

    project_root: Path
    data_dir: Path
    debug: bool
    resources: ResourcesConfig
    generators: tuple[tuple[str, tuple[str, ...]], ...]
    bundles: tuple[BundleDefinition, ...]

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot."""
        return {
            "project_root": str(self.project_root),
            "data_dir": str(self.data_dir),
            "debug": self.debug,
            "resources": {
                "root": str(self.resources.root),
                "sort_file_name": self.resources.sort_file_name,
                "licenses_file_name": self.resources.licenses_file_name,
            },
            "generators": {prefix: list(axes) for prefix, axes in self.generators},
            "bundles": [bundle.name for bundle in self.bundles],
        }


@dataclass(slots=True, frozen=True)
class ConfigOverrides:
    """Optional startup overrides applied at highest precedence."""

    resource_root: Path | None = None
    data_dir: Path | None = None
    debug: bool | None = None


def default_config(project_root: Path) -> EngineConfig:
    """Build default config for a given project root."""
    resolved_root = project_root.resolve()
    return EngineConfig(
        project_root=resolved_root,
        data_dir=resolved_root / DEFAULT_DATA_DIR_NAME,
        debug=False,
        resources=ResourcesConfig(root=resolved_root),
        generators=(),
        bundles=(),
    )


def load_config_file(project_root: Path) -> dict[str, object]:
    """Load optional webbundle.toml from the project root."""
    config_path = project_root / CONFIG_FILE_NAME
    if not config_path.exists():
        return {}
    with config_path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{CONFIG_FILE_NAME} must contain a top-level table.")
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def _tuple_of_strings(value: object, section: str, name: str) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise ValueError(f"Config field '{section}.{name}' must be a list of strings.")
    output: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"Config field '{section}.{name}' must contain only strings.")
        output.append(item)
    return tuple(output)


def _optional_str(value: object, section: str, name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"Config field '{section}.{name}' must be a string.")
    return value or None


def _optional_bool(value: object, section: str, name: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"Config field '{section}.{name}' must be a boolean.")
    return value


def _optional_int(value: object, section: str, name: str, default: int) -> int:
    if value is None:
        return default
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"Config field '{section}.{name}' must be an integer.")
    return value


def _parse_variant_sets(value: object, section: str) -> tuple[VariantSet, ...]:
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{section}.variants' must be a table.")
    variant_sets: list[VariantSet] = []
    for axis, entry in value.items():
        field_name = f"variants.{axis}"
        if isinstance(entry, list):
            values = _tuple_of_strings(entry, section, field_name)
            default = None
        elif isinstance(entry, dict):
            values = _tuple_of_strings(entry.get("values"), section, f"{field_name}.values")
            default = _optional_str(entry.get("default"), section, f"{field_name}.default")
            if default is None and "default" in entry:
                default = ""
        else:
            raise ValueError(
                f"Config field '{section}.{field_name}' must be a list or a table."
            )
        try:
            variant_sets.append(VariantSet.of(axis, values, default))
        except ValueError as exc:
            raise ValueError(f"Config field '{section}.{field_name}' is invalid: {exc}") from exc
    return tuple(variant_sets)


def _parse_bundle(name: str, payload: object) -> BundleDefinition:
    section = f"bundles.{name}"
    if not isinstance(payload, dict):
        raise ValueError(f"Config section '{section}' must be a table.")
    unknown = sorted(set(payload) - _BUNDLE_FIELDS)
    if unknown:
        raise ValueError(f"Config section '{section}' has unknown fields: {', '.join(unknown)}.")
    bundle_id = _optional_str(payload.get("id"), section, "id")
    if bundle_id is None:
        raise ValueError(f"Config field '{section}.id' is required.")
    file_extension = _optional_str(payload.get("file_extension"), section, "file_extension")
    if file_extension is None:
        suffix = Path(bundle_id).suffix
        if not suffix:
            raise ValueError(
                f"Config field '{section}.file_extension' is required when id has no extension."
            )
        file_extension = suffix
    if "mappings" not in payload:
        raise ValueError(f"Config field '{section}.mappings' is required.")
    mappings = _tuple_of_strings(payload["mappings"], section, "mappings")
    inclusion = InclusionPolicy(
        global_bundle=_optional_bool(payload.get("global"), section, "global", False),
        inclusion_order=_optional_int(payload.get("order"), section, "order", 0),
        debug_only=_optional_bool(payload.get("debug_only"), section, "debug_only", False),
        debug_never=_optional_bool(payload.get("debug_never"), section, "debug_never", False),
        ie_conditional_expression=_optional_str(
            payload.get("ie_expression"), section, "ie_expression"
        ),
        alternate_production_url=_optional_str(
            payload.get("alternate_production_url"), section, "alternate_production_url"
        ),
        debug_url=_optional_str(payload.get("debug_url"), section, "debug_url"),
    )
    variant_sets: tuple[VariantSet, ...] = ()
    if "variants" in payload:
        variant_sets = _parse_variant_sets(payload["variants"], section)
    dependencies: tuple[str, ...] = ()
    if "dependencies" in payload:
        dependencies = _tuple_of_strings(payload["dependencies"], section, "dependencies")
    return BundleDefinition(
        name=name,
        bundle_id=bundle_id,
        file_extension=file_extension,
        mappings=mappings,
        prefix=_optional_str(payload.get("prefix"), section, "prefix"),
        inclusion=inclusion,
        variant_sets=variant_sets,
        dependencies=dependencies,
    )


def merge_config(
    base: EngineConfig, payload: dict[str, object], overrides: ConfigOverrides
) -> EngineConfig:
    """Merge defaults, config file, then CLI/startup overrides."""
    resources_payload = _get_table(payload, "resources")
    generators_payload = _get_table(payload, "generators")
    bundles_payload = _get_table(payload, "bundles")
    settings_payload = _get_table(payload, "settings")

    resource_root = base.resources.root
    raw_root = _optional_str(resources_payload.get("root"), "resources", "root")
    if raw_root is not None:
        resource_root = (base.project_root / raw_root).resolve()
    sort_file_name = (
        _optional_str(resources_payload.get("sort_file_name"), "resources", "sort_file_name")
        or base.resources.sort_file_name
    )
    licenses_file_name = (
        _optional_str(
            resources_payload.get("licenses_file_name"), "resources", "licenses_file_name"
        )
        or base.resources.licenses_file_name
    )
    if sort_file_name == licenses_file_name:
        raise ValueError(
            "Config fields 'resources.sort_file_name' and 'resources.licenses_file_name' "
            "must differ."
        )

    generators: list[tuple[str, tuple[str, ...]]] = list(base.generators)
    for prefix, axes in generators_payload.items():
        generators.append((prefix, _tuple_of_strings(axes, "generators", prefix)))

    bundles = list(base.bundles)
    for name, bundle_payload in bundles_payload.items():
        bundles.append(_parse_bundle(name, bundle_payload))
    bundle_names = [bundle.name for bundle in bundles]
    for bundle in bundles:
        for dependency in bundle.dependencies:
            if dependency not in bundle_names:
                raise ValueError(
                    f"Config field 'bundles.{bundle.name}.dependencies' references "
                    f"unknown bundle '{dependency}'."
                )

    merged = EngineConfig(
        project_root=base.project_root,
        data_dir=base.data_dir,
        debug=_optional_bool(settings_payload.get("debug"), "settings", "debug", base.debug),
        resources=ResourcesConfig(
            root=resource_root,
            sort_file_name=sort_file_name,
            licenses_file_name=licenses_file_name,
        ),
        generators=tuple(generators),
        bundles=tuple(bundles),
    )
    return apply_overrides(merged, overrides)


def apply_overrides(config: EngineConfig, overrides: ConfigOverrides) -> EngineConfig:
    """Apply startup overrides at highest precedence."""
    resources = config.resources
    if overrides.resource_root is not None:
        resources = ResourcesConfig(
            root=overrides.resource_root.resolve(),
            sort_file_name=resources.sort_file_name,
            licenses_file_name=resources.licenses_file_name,
        )
    data_dir = overrides.data_dir or config.data_dir
    return EngineConfig(
        project_root=config.project_root,
        data_dir=data_dir.resolve(),
        debug=overrides.debug if overrides.debug is not None else config.debug,
        resources=resources,
        generators=config.generators,
        bundles=config.bundles,
    )


def load_effective_config(
    project_root: Path, overrides: ConfigOverrides | None = None
) -> EngineConfig:
    """Load effective config using merge order defaults -> config file -> overrides."""
    resolved_root = project_root.resolve()
    base = default_config(resolved_root)
    payload = load_config_file(resolved_root)
    return merge_config(base, payload, overrides or ConfigOverrides())
