"""Classification of raw bundle mapping strings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from webbundle.readers.base import GeneratorRegistry

RECURSIVE_SUFFIX = "/**"


class MappingKind(str, Enum):
    """Recognized forms of a mapping string."""

    DIRECTORY = "directory"
    RECURSIVE_DIRECTORY = "recursive_directory"
    FILE = "file"
    GENERATED = "generated"
    LICENSE = "license"


class BundleMappingError(ValueError):
    """Raised when a mapping string matches no supported form."""

    def __init__(self, bundle_name: str, mapping: str) -> None:
        super().__init__(
            f"Wrong mapping [{mapping}] for bundle [{bundle_name}]. Please check configuration."
        )
        self.bundle_name = bundle_name
        self.mapping = mapping


@dataclass(slots=True, frozen=True)
class BundleMapping:
    """Parsed mapping; ``path`` is the raw target with any ``**`` marker removed."""

    raw: str
    kind: MappingKind
    path: str
    generated: bool

    @property
    def is_directory(self) -> bool:
        return self.kind in (MappingKind.DIRECTORY, MappingKind.RECURSIVE_DIRECTORY)


def parse_mapping(
    raw: str,
    *,
    bundle_name: str,
    file_extension: str,
    licenses_file_name: str,
    generators: GeneratorRegistry,
) -> BundleMapping:
    """Classify one mapping string; directory forms are checked first."""
    generated = generators.is_generated_path(raw)
    if raw.endswith("/"):
        return BundleMapping(raw=raw, kind=MappingKind.DIRECTORY, path=raw, generated=generated)
    if raw.endswith(RECURSIVE_SUFFIX):
        return BundleMapping(
            raw=raw,
            kind=MappingKind.RECURSIVE_DIRECTORY,
            path=raw[: -len("**")],
            generated=generated,
        )
    if file_extension and raw.endswith(file_extension):
        return BundleMapping(raw=raw, kind=MappingKind.FILE, path=raw, generated=generated)
    if generated:
        return BundleMapping(raw=raw, kind=MappingKind.GENERATED, path=raw, generated=True)
    if raw.endswith(licenses_file_name):
        return BundleMapping(raw=raw, kind=MappingKind.LICENSE, path=raw, generated=False)
    raise BundleMappingError(bundle_name=bundle_name, mapping=raw)


def normalize_extension(file_extension: str | None) -> str:
    """Return the extension with a leading dot, or an empty string."""
    if not file_extension:
        return ""
    if file_extension.startswith("."):
        return file_extension
    return f".{file_extension}"
