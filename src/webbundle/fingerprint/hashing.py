"""Content hashing for bundle fingerprints."""

from __future__ import annotations

import hashlib
from collections.abc import Iterable

from webbundle.readers.base import GeneratorRegistry, ResourceReader
from webbundle.resolver.models import ResourcePath

FINGERPRINT_LENGTH = 10


def content_fingerprint(
    reader: ResourceReader,
    paths: Iterable[ResourcePath],
    length: int = FINGERPRINT_LENGTH,
    generators: GeneratorRegistry | None = None,
) -> str:
    """Hash resource bytes in bundle order and return a truncated hex digest.

    Generated paths are produced when served, so only their (variant) path
    name enters the digest.
    """
    if length < 1:
        raise ValueError("Fingerprint length must be a positive integer.")
    digest = hashlib.sha256()
    for entry in paths:
        digest.update(entry.path.encode("utf-8"))
        digest.update(b"\x00")
        if generators is None or not generators.is_generated_path(entry.path):
            digest.update(reader.read_bytes(entry.path))
        digest.update(b"\x00")
    return digest.hexdigest()[:length]
