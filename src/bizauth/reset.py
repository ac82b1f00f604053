"""Password reset token records.

Raw tokens go to the user by email; only their SHA-256 hash is stored.
A token is accepted once, for its own email, until ``expires_at``.
"""

from __future__ import annotations

import logging
import sqlite3
import uuid
from contextlib import closing
from pathlib import Path

from bizauth.config import AuthConfig
from bizauth.crypto.base import DigestProvider
from bizauth.crypto.system import SystemDigest
from bizauth.passwords import generate_reset_token

log = logging.getLogger(__name__)

USED_TOKEN_RETENTION = 7 * 24 * 60 * 60


class ResetTokenStore:
    """SQLite-backed store for pending password resets."""

    def __init__(
        self,
        db_path: str | Path,
        config: AuthConfig | None = None,
        *,
        digest: DigestProvider | None = None,
    ):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._digest = digest or SystemDigest()
        self._token_bytes = (config or AuthConfig()).reset_token_bytes
        self._init_db()

    def _conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA busy_timeout=5000")
        return conn

    def _init_db(self) -> None:
        with closing(self._conn()) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS password_reset_tokens (
                    id TEXT PRIMARY KEY,
                    email TEXT NOT NULL,
                    token_hash TEXT NOT NULL UNIQUE,
                    created_at INTEGER NOT NULL,
                    expires_at INTEGER NOT NULL,
                    used INTEGER NOT NULL DEFAULT 0,
                    used_at INTEGER
                )
            """)
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_reset_email ON password_reset_tokens(email)"
            )
            conn.commit()

    def issue(self, email: str, ttl_seconds: int = 3600) -> str:
        """Create a reset token for *email*. Returns the raw token."""
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        token = generate_reset_token(self._digest, self._token_bytes)
        now = self._digest.now()
        with closing(self._conn()) as conn:
            conn.execute(
                """INSERT INTO password_reset_tokens
                   (id, email, token_hash, created_at, expires_at)
                   VALUES (?, ?, ?, ?, ?)""",
                (
                    str(uuid.uuid4()),
                    email.strip().lower(),
                    self._digest.sha256_hex(token),
                    now,
                    now + ttl_seconds,
                ),
            )
            conn.commit()
        return token

    def consume(self, email: str, token: str) -> bool:
        """Mark the token used. ``True`` only for a live, unused, matching token."""
        if not isinstance(token, str) or not token or not isinstance(email, str):
            return False
        now = self._digest.now()
        with closing(self._conn()) as conn:
            cur = conn.execute(
                """UPDATE password_reset_tokens SET used = 1, used_at = ?
                   WHERE email = ? AND token_hash = ? AND used = 0 AND expires_at > ?""",
                (now, email.strip().lower(), self._digest.sha256_hex(token), now),
            )
            conn.commit()
            accepted = cur.rowcount == 1
        if not accepted:
            log.info("Rejected password reset token for %s", email)
        return accepted

    def pending(self, email: str) -> int:
        """Number of live, unused tokens for *email*."""
        now = self._digest.now()
        with closing(self._conn()) as conn:
            row = conn.execute(
                """SELECT COUNT(*) AS n FROM password_reset_tokens
                   WHERE email = ? AND used = 0 AND expires_at > ?""",
                (email.strip().lower(), now),
            ).fetchone()
        return row["n"]

    def cleanup(self) -> dict[str, int]:
        """Delete expired tokens and used tokens older than the retention window."""
        now = self._digest.now()
        with closing(self._conn()) as conn:
            expired = conn.execute(
                "DELETE FROM password_reset_tokens WHERE expires_at < ?", (now,)
            ).rowcount
            used = conn.execute(
                "DELETE FROM password_reset_tokens WHERE used = 1 AND created_at < ?",
                (now - USED_TOKEN_RETENTION,),
            ).rowcount
            conn.commit()
        log.info("Reset token cleanup: %d expired, %d used removed", expired, used)
        return {"expired_tokens_removed": expired, "used_tokens_removed": used}
