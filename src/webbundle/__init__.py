"""Bundle resolution and fingerprint engine for web resources."""

from webbundle.bundle import ResourceBundle
from webbundle.registry import BundleRegistry, build_registry

__all__ = ["BundleRegistry", "ResourceBundle", "build_registry"]
