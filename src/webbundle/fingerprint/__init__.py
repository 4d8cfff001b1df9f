"""Fingerprint storage and hashing."""

from .hashing import FINGERPRINT_LENGTH, content_fingerprint
from .store import FingerprintNotReadyError, FingerprintStore

__all__ = [
    "FINGERPRINT_LENGTH",
    "FingerprintNotReadyError",
    "FingerprintStore",
    "content_fingerprint",
]
