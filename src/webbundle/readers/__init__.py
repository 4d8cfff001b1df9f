"""Resource readers and generator registries."""

from .base import GeneratorRegistry, ResourceNotFoundError, ResourceReader
from .filesystem import FileSystemResourceReader
from .generators import PrefixGeneratorRegistry
from .memory import InMemoryResourceReader

__all__ = [
    "FileSystemResourceReader",
    "GeneratorRegistry",
    "InMemoryResourceReader",
    "PrefixGeneratorRegistry",
    "ResourceNotFoundError",
    "ResourceReader",
]
