"""Password key derivation.

Two schemes share the ``iterations:salt:key`` storage format:

* ``batched-sha256``: the scheme every credential already stored by the
  mobile app was written with. The salted password is digested once, then
  re-digested ``iterations`` times, ten rounds at a time by hashing the
  current hex digest concatenated with itself ten times; the remainder is
  applied one digest per round.
* ``pbkdf2-sha256``: PBKDF2-HMAC-SHA256 for deployments with no legacy
  credentials to keep verifying.

Both return lowercase hex of ``key_length`` bytes.
"""

from __future__ import annotations

import hashlib
from typing import Callable

from bizauth.crypto.base import DigestProvider
from bizauth.crypto.system import SystemDigest
from bizauth.exceptions import ConfigError

_BATCH = 10
_SHA256_BYTES = 32

KeyDerivation = Callable[..., str]


def _check(iterations: int, key_length: int, max_length: int | None) -> None:
    if not isinstance(iterations, int) or isinstance(iterations, bool) or iterations <= 0:
        raise ValueError(f"iterations must be a positive integer, got {iterations!r}")
    if key_length <= 0 or (max_length is not None and key_length > max_length):
        raise ValueError(f"key_length out of range: {key_length}")


def derive_key_batched(
    password: str,
    salt: str,
    iterations: int,
    key_length: int,
    *,
    digest: DigestProvider | None = None,
) -> str:
    """Derive the legacy batched SHA-256 key. Output is truncated, never padded."""
    _check(iterations, key_length, _SHA256_BYTES)
    digest = digest or SystemDigest()

    current = digest.sha256_hex(password + salt)
    for _ in range(iterations // _BATCH):
        current = digest.sha256_hex(current * _BATCH)
    for _ in range(iterations % _BATCH):
        current = digest.sha256_hex(current)

    return current[: key_length * 2]


def derive_key_pbkdf2(
    password: str,
    salt: str,
    iterations: int,
    key_length: int,
    *,
    digest: DigestProvider | None = None,
) -> str:
    """PBKDF2-HMAC-SHA256 over the UTF-8 password and the salt's hex text."""
    _check(iterations, key_length, None)
    dk = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("ascii"), iterations, dklen=key_length
    )
    return dk.hex()


KDFS: dict[str, KeyDerivation] = {
    "batched-sha256": derive_key_batched,
    "pbkdf2-sha256": derive_key_pbkdf2,
}


def get_kdf(name: str) -> KeyDerivation:
    try:
        return KDFS[name]
    except KeyError:
        raise ConfigError(f"Unknown key derivation scheme: {name!r}") from None
