"""Shared fixtures: a deterministic digest provider with a settable clock."""

from __future__ import annotations

import hashlib

import pytest

from bizauth.config import AuthConfig

TEST_SECRET = "test-secret-0123456789abcdef0123456789abcdef"
T0 = 1_700_000_000


class FakeDigest:
    """Real SHA-256, counter-based "random" bytes, manual clock."""

    def __init__(self, now: int = T0):
        self.clock = now
        self._counter = 0

    def random_bytes(self, n: int) -> bytes:
        self._counter += 1
        return bytes((self._counter + i) % 256 for i in range(n))

    def sha256_hex(self, data: str) -> str:
        return hashlib.sha256(data.encode("utf-8")).hexdigest()

    def now(self) -> int:
        return self.clock

    def advance(self, seconds: int) -> None:
        self.clock += seconds


@pytest.fixture()
def digest() -> FakeDigest:
    return FakeDigest()


@pytest.fixture()
def config() -> AuthConfig:
    return AuthConfig(jwt_secret=TEST_SECRET)
