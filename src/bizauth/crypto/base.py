"""Digest / randomness provider protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class DigestProvider(Protocol):
    """Platform primitives the hashing and token code is built on."""

    def random_bytes(self, n: int) -> bytes:
        """Return *n* bytes from a cryptographically secure source."""
        ...

    def sha256_hex(self, data: str) -> str:
        """Return the lowercase hex SHA-256 digest of UTF-8 *data*."""
        ...

    def now(self) -> int:
        """Current time in epoch seconds."""
        ...
