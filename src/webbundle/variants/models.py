"""Variant axis model."""

from __future__ import annotations

from dataclasses import dataclass

VARIANT_SEPARATOR = "|"
VARIANT_PATH_SEPARATOR = "@"
LOCALE_SEGMENT_SEPARATOR = "_"


@dataclass(slots=True, frozen=True)
class VariantSet:
    """One variation axis with its ordered values and default value."""

    axis: str
    values: tuple[str, ...]
    default: str = ""

    def __post_init__(self) -> None:
        if not self.axis.strip():
            raise ValueError("Variant axis name must be non-empty.")
        if not self.values:
            raise ValueError(f"Variant set '{self.axis}' must declare at least one value.")
        if len(set(self.values)) != len(self.values):
            raise ValueError(f"Variant set '{self.axis}' contains duplicate values.")
        if self.default not in self.values:
            raise ValueError(
                f"Default value '{self.default}' is not declared for variant set '{self.axis}'."
            )
        if any(VARIANT_SEPARATOR in value for value in self.values):
            raise ValueError(f"Variant values must not contain '{VARIANT_SEPARATOR}'.")

    @classmethod
    def of(cls, axis: str, values: list[str] | tuple[str, ...], default: str | None = None) -> VariantSet:
        """Build a set, defaulting to '' when declared, else the first value."""
        ordered = tuple(values)
        if default is None:
            default = "" if "" in ordered or not ordered else ordered[0]
        return cls(axis=axis, values=ordered, default=default)

    def best_match(self, requested: str | None) -> str:
        """Return the most specific declared value for a requested one.

        ``fr_CA`` falls back to ``fr`` before the default value is used.
        """
        candidate = requested or ""
        while candidate:
            if candidate in self.values:
                return candidate
            cut = candidate.rfind(LOCALE_SEGMENT_SEPARATOR)
            if cut < 0:
                break
            candidate = candidate[:cut]
        return self.default
