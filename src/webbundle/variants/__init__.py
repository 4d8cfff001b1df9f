"""Variant selection package."""

from .engine import VariantContext, VariantResolver, all_variant_keys, variant_path_name
from .models import VARIANT_PATH_SEPARATOR, VARIANT_SEPARATOR, VariantSet

__all__ = [
    "VARIANT_PATH_SEPARATOR",
    "VARIANT_SEPARATOR",
    "VariantContext",
    "VariantResolver",
    "VariantSet",
    "all_variant_keys",
    "variant_path_name",
]
