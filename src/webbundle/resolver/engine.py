"""Expansion of mapping strings into ordered bundle resource paths."""

from __future__ import annotations

from collections.abc import Sequence

from webbundle.paths import as_path, join_paths
from webbundle.readers.base import GeneratorRegistry, ResourceReader
from webbundle.resolver.mapping import MappingKind, normalize_extension, parse_mapping
from webbundle.resolver.models import InclusionPolicy, ResolvedPaths, ResourcePath
from webbundle.resolver.sorting import read_sort_entries, sorted_resource_names

DEFAULT_SORT_FILE_NAME = ".sorting"
DEFAULT_LICENSES_FILE_NAME = ".license"


class SortFileReadError(RuntimeError):
    """Raised when a sort file present in a listing cannot be read."""

    def __init__(self, bundle_name: str, path: str) -> None:
        super().__init__(f"Unable to read sorting file [{path}] for bundle [{bundle_name}].")
        self.bundle_name = bundle_name
        self.path = path


class PathMappingResolver:
    """Resolve mapping strings for one bundle into a ResolvedPaths snapshot."""

    def __init__(
        self,
        *,
        bundle_name: str,
        reader: ResourceReader,
        generators: GeneratorRegistry,
        file_extension: str | None,
        bundle_prefix: str | None = None,
        inclusion: InclusionPolicy | None = None,
        sort_file_name: str = DEFAULT_SORT_FILE_NAME,
        licenses_file_name: str = DEFAULT_LICENSES_FILE_NAME,
    ) -> None:
        self._bundle_name = bundle_name
        self._reader = reader
        self._generators = generators
        self._file_extension = normalize_extension(file_extension)
        self._bundle_prefix = bundle_prefix
        self._inclusion = inclusion or InclusionPolicy()
        self._sort_file_name = sort_file_name
        self._licenses_file_name = licenses_file_name

    @property
    def file_extension(self) -> str:
        return self._file_extension

    def resolve(self, mappings: Sequence[str]) -> ResolvedPaths:
        """Run one full resolution pass; any failure aborts the whole pass."""
        ordered = tuple(mappings)
        state = _PassState()
        for raw in ordered:
            mapping = parse_mapping(
                raw,
                bundle_name=self._bundle_name,
                file_extension=self._file_extension,
                licenses_file_name=self._licenses_file_name,
                generators=self._generators,
            )
            if mapping.kind is MappingKind.DIRECTORY:
                self._add_items_from_dir(state, mapping.path, add_sub_dirs=False)
            elif mapping.kind is MappingKind.RECURSIVE_DIRECTORY:
                self._add_items_from_dir(state, mapping.path, add_sub_dirs=True)
            elif mapping.kind is MappingKind.LICENSE:
                state.licenses.add(as_path(mapping.path))
            elif mapping.kind is MappingKind.GENERATED:
                self._add_path(state, mapping.path)
            else:
                self._add_path(state, _as_path(mapping.path, mapping.generated))
        return ResolvedPaths(
            production_paths=tuple(state.production),
            debug_paths=tuple(state.debug),
            licenses=frozenset(state.licenses),
            mappings=ordered,
        )

    def _add_path(self, state: _PassState, path: str) -> None:
        entry = ResourcePath(path=path, bundle_prefix=self._bundle_prefix)
        if not self._inclusion.debug_only:
            state.production.append(entry)
        if not self._inclusion.debug_never:
            state.debug.append(entry)

    def _is_resource(self, path: str) -> bool:
        if self._file_extension and path.endswith(self._file_extension):
            return True
        return self._generators.is_generated_path(path)

    def _add_items_from_dir(self, state: _PassState, dir_name: str, add_sub_dirs: bool) -> None:
        generated = self._generators.is_generated_path(dir_name)
        names = [name.strip("/") for name in self._reader.list_resources(dir_name)]
        consumed: set[str] = set()

        if self._sort_file_name in names:
            sort_path = join_paths(dir_name, self._sort_file_name, generated)
            entries = self._read_sort_file(sort_path)
            for name in sorted_resource_names(entries, names):
                consumed.add(name)
                resource_path = join_paths(dir_name, name, generated)
                if self._is_resource(resource_path):
                    self._add_path(state, _as_path(resource_path, generated))
                elif add_sub_dirs and self._reader.is_directory(resource_path):
                    self._add_items_from_dir(state, resource_path + "/", add_sub_dirs=True)

        if self._licenses_file_name in names:
            state.licenses.add(join_paths(dir_name, self._licenses_file_name, generated))

        folders: list[str] = []
        for name in names:
            if name in consumed or name in (self._sort_file_name, self._licenses_file_name):
                continue
            resource_path = join_paths(dir_name, name, generated)
            is_dir = self._reader.is_directory(resource_path)
            if is_dir:
                if add_sub_dirs:
                    folders.append(resource_path)
                continue
            if self._is_resource(resource_path):
                self._add_path(state, _as_path(resource_path, generated))

        # Subdirectories go last unless the sort file placed them.
        for folder in folders:
            self._add_items_from_dir(state, folder + "/", add_sub_dirs=True)

    def _read_sort_file(self, sort_path: str) -> list[str]:
        try:
            with self._reader.open_resource(sort_path) as handle:
                return read_sort_entries(handle)
        except OSError as exc:
            raise SortFileReadError(bundle_name=self._bundle_name, path=sort_path) from exc


class _PassState:
    """Mutable accumulators private to one resolution pass."""

    __slots__ = ("production", "debug", "licenses")

    def __init__(self) -> None:
        self.production: list[ResourcePath] = []
        self.debug: list[ResourcePath] = []
        self.licenses: set[str] = set()


def _as_path(path: str, generated: bool) -> str:
    if generated:
        return path
    return as_path(path)
