"""Mapping resolution package."""

from .engine import (
    DEFAULT_LICENSES_FILE_NAME,
    DEFAULT_SORT_FILE_NAME,
    PathMappingResolver,
    SortFileReadError,
)
from .mapping import BundleMapping, BundleMappingError, MappingKind, normalize_extension, parse_mapping
from .models import InclusionPolicy, ResolvedPaths, ResourcePath
from .sorting import read_sort_entries, sorted_resource_names

__all__ = [
    "BundleMapping",
    "BundleMappingError",
    "DEFAULT_LICENSES_FILE_NAME",
    "DEFAULT_SORT_FILE_NAME",
    "InclusionPolicy",
    "MappingKind",
    "PathMappingResolver",
    "ResolvedPaths",
    "ResourcePath",
    "SortFileReadError",
    "normalize_extension",
    "parse_mapping",
    "read_sort_entries",
    "sorted_resource_names",
]
