"""JWT issuance and verification.

Tokens are HS256-signed with the secret from :class:`AuthConfig`. The
claim set is ``sub``, ``email``, ``role``, ``iat``, ``exp`` and ``iss``;
``exp`` is ``iat`` plus the configured TTL (7 days by default).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

import jwt
from pydantic import ValidationError

from bizauth.config import AuthConfig
from bizauth.core.types import Claims, Role, UserIdentity
from bizauth.crypto.system import SystemDigest
from bizauth.exceptions import (
    TokenError,
    TokenExpired,
    TokenIssuerMismatch,
    TokenMalformed,
    TokenSignatureInvalid,
)

log = logging.getLogger(__name__)

_REQUIRED_CLAIMS = ["sub", "email", "iat", "exp", "iss"]


class Clock(Protocol):
    def now(self) -> int: ...


class TokenIssuer:
    """Mint and check session tokens for one signing secret."""

    def __init__(self, config: AuthConfig | None = None, *, clock: Clock | None = None):
        self._config = config or AuthConfig()
        self._clock = clock or SystemDigest()
        if self._config.uses_dev_secret:
            log.warning(
                "BIZAUTH_JWT_SECRET not set! Using insecure default. "
                "Set BIZAUTH_JWT_SECRET env var for production."
            )

    @property
    def _secret(self) -> str:
        return self._config.jwt_secret.get_secret_value()

    def generate(self, user: UserIdentity | Mapping[str, Any]) -> str:
        """Create a token for *user* (``id``, ``email``, optional ``role``)."""
        identity = user if isinstance(user, UserIdentity) else UserIdentity.model_validate(user)
        now = self._clock.now()
        payload = {
            "sub": identity.id,
            "email": identity.email,
            "role": identity.role or Role.user.value,
            "iat": now,
            "exp": now + self._config.token_ttl_seconds,
            "iss": self._config.issuer,
        }
        return jwt.encode(
            payload,
            self._secret,
            algorithm=self._config.jwt_algorithm,
            headers={"typ": "JWT"},
        )

    def verify(self, token: str) -> Claims:
        """Decode and validate a token. Raises a :class:`TokenError` subclass."""
        if not isinstance(token, str) or token.count(".") != 2:
            raise TokenMalformed("Token must have three dot-separated segments")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._config.jwt_algorithm],
                # expiry and issuer are checked below against the injected clock
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                    "require": _REQUIRED_CLAIMS,
                },
            )
        except jwt.InvalidSignatureError as e:
            raise TokenSignatureInvalid("Invalid signature") from e
        except jwt.InvalidAlgorithmError as e:
            raise TokenSignatureInvalid(f"Unexpected algorithm: {e}") from e
        except jwt.InvalidTokenError as e:
            raise TokenMalformed(str(e)) from e

        try:
            claims = Claims.model_validate(payload)
        except ValidationError as e:
            raise TokenMalformed(f"Invalid claims: {e.error_count()} error(s)") from e

        now = self._clock.now()
        if claims.is_expired(now):
            raise TokenExpired(claims.exp, now)
        if claims.iss != self._config.issuer:
            raise TokenIssuerMismatch(claims.iss)
        return claims

    def decode_unverified(self, token: str) -> dict[str, Any]:
        """Return the payload without checking signature or expiry."""
        if not isinstance(token, str) or token.count(".") != 2:
            raise TokenMalformed("Token must have three dot-separated segments")
        try:
            return jwt.decode(token, options={"verify_signature": False})
        except jwt.InvalidTokenError as e:
            raise TokenMalformed(str(e)) from e

    def is_expired(self, token: str) -> bool:
        """``True`` unless the token verifies right now."""
        try:
            self.verify(token)
        except TokenError as e:
            log.debug("Token rejected: %s", type(e).__name__)
            return True
        return False


_default_issuer: TokenIssuer | None = None


def get_default_issuer() -> TokenIssuer:
    global _default_issuer
    if _default_issuer is None:
        _default_issuer = TokenIssuer(AuthConfig.from_env())
    return _default_issuer


def set_default_issuer(issuer: TokenIssuer | None) -> None:
    global _default_issuer
    _default_issuer = issuer


def generate_jwt(user: UserIdentity | Mapping[str, Any]) -> str:
    return get_default_issuer().generate(user)


def verify_jwt(token: str) -> Claims:
    return get_default_issuer().verify(token)
