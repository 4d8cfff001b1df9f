"""Path normalization primitives."""

from .normalize import SEPARATOR, as_dir_path, as_path, file_name, join_paths, normalize_path

__all__ = [
    "SEPARATOR",
    "as_dir_path",
    "as_path",
    "file_name",
    "join_paths",
    "normalize_path",
]
