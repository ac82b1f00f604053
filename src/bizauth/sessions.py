"""Client-side session token vault.

Holds the bearer token of the signed-in user and drops it once it stops
verifying.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from bizauth.tokens import TokenIssuer

log = logging.getLogger(__name__)

AUTH_TOKEN_KEY = "auth_token"


@runtime_checkable
class TokenStore(Protocol):
    """Minimal key/value interface of a secure token store."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryTokenStore:
    """Process-local store, for tests and server-side sessions."""

    def __init__(self):
        self._items: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def delete(self, key: str) -> None:
        self._items.pop(key, None)


class SessionVault:
    """Store, fetch and expire the current user's token."""

    def __init__(self, store: TokenStore, issuer: TokenIssuer, *, key: str = AUTH_TOKEN_KEY):
        self._store = store
        self._issuer = issuer
        self._key = key

    def store_token(self, token: str) -> None:
        self._store.set(self._key, token)

    def get_token(self) -> str | None:
        return self._store.get(self._key)

    def remove_token(self) -> None:
        self._store.delete(self._key)

    def get_valid_token(self) -> str | None:
        """Return the stored token if it still verifies, else remove it."""
        token = self.get_token()
        if not token:
            return None
        if self._issuer.is_expired(token):
            log.info("Stored session token is no longer valid; removing it")
            self.remove_token()
            return None
        return token
