"""Per-variant content fingerprints and cache-busting URL prefixes."""

from __future__ import annotations


class FingerprintNotReadyError(RuntimeError):
    """Raised when a URL prefix is requested before the primary hash is set."""

    def __init__(self, bundle_name: str) -> None:
        super().__init__(
            f"The primary fingerprint of bundle [{bundle_name}] must be set "
            "before accessing the url prefix."
        )
        self.bundle_name = bundle_name


class FingerprintStore:
    """Primary hash plus one hash per variant key.

    Each write is a single reference or dict-item assignment, so writers for
    different variant keys never block or overwrite each other.
    """

    def __init__(self, bundle_name: str) -> None:
        self._bundle_name = bundle_name
        self._primary: str | None = None
        self._by_variant: dict[str, str] = {}

    def set_fingerprint(self, variant_key: str | None, fingerprint: str) -> None:
        """Store a hash; an empty or None key targets the primary hash."""
        if not isinstance(fingerprint, str) or not fingerprint:
            raise ValueError("Fingerprint must be a non-empty string.")
        if not variant_key:
            self._primary = fingerprint
            return
        self._by_variant[variant_key] = fingerprint

    def get_fingerprint(self, variant_key: str | None = None) -> str | None:
        """Return the stored hash, or None when it has not been built yet."""
        if not variant_key:
            return self._primary
        return self._by_variant.get(variant_key)

    @property
    def is_ready(self) -> bool:
        return self._primary is not None

    def variant_fingerprints(self) -> dict[str, str]:
        """Return a sorted copy of the per-variant hashes."""
        snapshot = dict(self._by_variant)
        return {key: snapshot[key] for key in sorted(snapshot)}

    def url_prefix(self, variant_key: str | None) -> str:
        """Return ``{hash}.{key}/`` when a variant hash exists, else ``{primary}/``."""
        primary = self._primary
        if primary is None:
            raise FingerprintNotReadyError(self._bundle_name)
        if variant_key:
            variant_hash = self._by_variant.get(variant_key)
            if variant_hash:
                return f"{variant_hash}.{variant_key}/"
        return f"{primary}/"
