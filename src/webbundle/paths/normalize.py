"""Path normalization helpers for bundle-relative resource paths."""

from __future__ import annotations

from typing import Final

SEPARATOR: Final[str] = "/"


def _split_segments(candidate: str) -> list[str]:
    """Split a path into segments, dropping empty and '.' entries and folding '..'."""
    normalized = candidate.replace("\\", SEPARATOR)
    segments: list[str] = []
    for part in normalized.split(SEPARATOR):
        if part in ("", "."):
            continue
        if part == "..":
            if segments:
                segments.pop()
            continue
        segments.append(part)
    return segments


def normalize_path(candidate: str) -> str:
    """Return the path without leading/trailing separators or redundant segments."""
    return SEPARATOR.join(_split_segments(candidate))


def as_path(candidate: str) -> str:
    """Normalize a resource path so it carries exactly one leading separator."""
    return SEPARATOR + normalize_path(candidate)


def as_dir_path(candidate: str) -> str:
    """Normalize a directory path so it starts and ends with a separator."""
    normalized = normalize_path(candidate)
    if not normalized:
        return SEPARATOR
    return f"{SEPARATOR}{normalized}{SEPARATOR}"


def join_paths(prefix: str, path: str, generated: bool = False) -> str:
    """Join two path fragments.

    Generated paths keep their raw form (their prefix such as ``messages:`` must
    not be rewritten), so only the separator between the fragments is fixed up.
    """
    if generated:
        if not prefix:
            return path
        if prefix.endswith(SEPARATOR) or prefix.endswith(":"):
            return prefix + path.lstrip(SEPARATOR)
        return f"{prefix}{SEPARATOR}{path.lstrip(SEPARATOR)}"
    return as_path(f"{prefix}{SEPARATOR}{path}")


def file_name(path: str) -> str:
    """Return the final segment of a path."""
    stripped = path.rstrip(SEPARATOR)
    return stripped.rsplit(SEPARATOR, 1)[-1]
