"""Sort file parsing for explicit directory ordering."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TextIO

from webbundle.paths import normalize_path


def read_sort_entries(handle: TextIO) -> list[str]:
    """Return names listed in a sort file, one per line or comma separated."""
    entries: list[str] = []
    for line in handle:
        for token in line.split(","):
            name = token.strip()
            if name:
                entries.append(name)
    return entries


def sorted_resource_names(entries: Iterable[str], available: Iterable[str]) -> list[str]:
    """Match sort entries against a directory listing.

    Returns the listing names in sort-file order. Entries that do not exist in
    the listing are skipped; each listing name is used at most once.
    """
    remaining: dict[str, str] = {}
    for name in available:
        remaining.setdefault(normalize_path(name), name)
    ordered: list[str] = []
    for entry in entries:
        match = remaining.pop(normalize_path(entry), None)
        if match is not None:
            ordered.append(match)
    return ordered
