"""Password hashing, verification, and reset tokens.

Stored credentials are ``iterations:salt_hex:key_hex``. Verification fails
closed: anything that does not parse is a mismatch, never an error.
"""

from __future__ import annotations

import hmac
import logging
import re

from bizauth.config import AuthConfig
from bizauth.core.kdf import get_kdf
from bizauth.crypto.base import DigestProvider
from bizauth.crypto.system import SystemDigest

log = logging.getLogger(__name__)

# Unsalted SHA-256 hex written by the first release of the mobile app.
_LEGACY_DIGEST = re.compile(r"^[0-9a-f]{64}$")
_MAX_ITERATION_DIGITS = 9


def _parse(stored: object) -> tuple[int, str, str] | None:
    if not isinstance(stored, str):
        return None
    parts = stored.split(":")
    if len(parts) != 3 or not all(parts):
        return None
    iterations_str, salt, key = parts
    if not (iterations_str.isascii() and iterations_str.isdigit()):
        return None
    if len(iterations_str) > _MAX_ITERATION_DIGITS:
        return None
    try:
        iterations = int(iterations_str)
        bytes.fromhex(salt)
        bytes.fromhex(key)
    except ValueError:
        return None
    if iterations <= 0:
        return None
    return iterations, salt, key.lower()


def is_legacy_digest(stored: object) -> bool:
    return isinstance(stored, str) and bool(_LEGACY_DIGEST.match(stored))


class PasswordHasher:
    """Hash and verify passwords with the configured derivation scheme."""

    def __init__(self, config: AuthConfig | None = None, *, digest: DigestProvider | None = None):
        self._config = config or AuthConfig()
        self._digest = digest or SystemDigest()
        self._kdf = get_kdf(self._config.kdf)

    @property
    def config(self) -> AuthConfig:
        return self._config

    def _derive(self, password: str, salt: str, iterations: int) -> str:
        return self._kdf(
            password, salt, iterations, self._config.key_length, digest=self._digest
        )

    def hash(self, password: str) -> str:
        """Hash a password. Returns 'iterations:salt_hex:key_hex'."""
        salt = self._digest.random_bytes(self._config.salt_bytes).hex()
        iterations = self._config.iterations
        key = self._derive(password, salt, iterations)
        return f"{iterations}:{salt}:{key}"

    def verify(self, password: str, stored: object) -> bool:
        """Verify a password against a stored credential string."""
        parsed = _parse(stored)
        if parsed is None:
            log.debug("Rejecting malformed stored credential")
            return False
        iterations, salt, expected = parsed
        if iterations > self._config.max_iterations:
            log.warning("Rejecting stored credential with %d iterations", iterations)
            return False
        if len(expected) != self._config.key_length * 2 or not isinstance(password, str):
            return False
        try:
            derived = self._derive(password, salt, iterations)
        except ValueError:
            return False
        return hmac.compare_digest(derived.encode("ascii"), expected.encode("ascii"))

    def needs_rehash(self, stored: object) -> bool:
        if is_legacy_digest(stored):
            return True
        parsed = _parse(stored)
        if parsed is None:
            return True
        iterations, _, key = parsed
        return iterations != self._config.iterations or len(key) != self._config.key_length * 2

    def reset_token(self) -> str:
        """Password reset token of ``reset_token_bytes`` random bytes, hex encoded."""
        return generate_reset_token(self._digest, self._config.reset_token_bytes)

    def verify_and_upgrade(self, password: str, stored: object) -> tuple[bool, str | None]:
        """Verify, returning a replacement credential when the stored one is outdated.

        Accepts the unsalted SHA-256 digests of the first release so that
        those accounts migrate on their next successful login.
        """
        if is_legacy_digest(stored):
            if not isinstance(password, str):
                return False, None
            candidate = self._digest.sha256_hex(password)
            if not hmac.compare_digest(candidate.encode("ascii"), stored.encode("ascii")):
                return False, None
            log.info("Upgrading legacy SHA-256 credential")
            return True, self.hash(password)

        if not self.verify(password, stored):
            return False, None
        if self.needs_rehash(stored):
            log.info("Rehashing credential with %d iterations", self._config.iterations)
            return True, self.hash(password)
        return True, None


def generate_reset_token(digest: DigestProvider | None = None, nbytes: int = 32) -> str:
    """Generate a random password reset token (hex, ``2 * nbytes`` chars)."""
    digest = digest or SystemDigest()
    return digest.random_bytes(nbytes).hex()


_default_hasher: PasswordHasher | None = None


def get_default_hasher() -> PasswordHasher:
    global _default_hasher
    if _default_hasher is None:
        _default_hasher = PasswordHasher(AuthConfig.from_env())
    return _default_hasher


def set_default_hasher(hasher: PasswordHasher | None) -> None:
    global _default_hasher
    _default_hasher = hasher


def hash_password(password: str) -> str:
    return get_default_hasher().hash(password)


def verify_password(password: str, stored: object) -> bool:
    return get_default_hasher().verify(password, stored)


def verify_and_upgrade(password: str, stored: object) -> tuple[bool, str | None]:
    return get_default_hasher().verify_and_upgrade(password, stored)
