"""Default provider backed by the OS CSPRNG and hashlib."""

from __future__ import annotations

import hashlib
import secrets
import time


class SystemDigest:
    """``secrets`` for randomness, ``hashlib`` for SHA-256, wall clock."""

    def random_bytes(self, n: int) -> bytes:
        if n <= 0:
            raise ValueError(f"random_bytes needs a positive length, got {n}")
        return secrets.token_bytes(n)

    def sha256_hex(self, data: str) -> str:
        return hashlib.sha256(data.encode("utf-8")).hexdigest()

    def now(self) -> int:
        return int(time.time())
