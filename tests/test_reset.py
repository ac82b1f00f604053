"""Tests for password reset token records."""

from pathlib import Path

import pytest

from bizauth.reset import USED_TOKEN_RETENTION, ResetTokenStore


@pytest.fixture()
def store(tmp_path: Path, digest) -> ResetTokenStore:
    return ResetTokenStore(tmp_path / "reset.db", digest=digest)


class TestIssue:
    def test_returns_hex_token(self, store: ResetTokenStore):
        token = store.issue("user@example.com")
        assert len(token) == 64
        assert store.pending("user@example.com") == 1

    def test_token_not_stored_in_clear(self, store: ResetTokenStore):
        import sqlite3

        token = store.issue("user@example.com")
        with sqlite3.connect(store.db_path) as conn:
            rows = conn.execute("SELECT token_hash FROM password_reset_tokens").fetchall()
        assert rows and all(token not in r[0] for r in rows)

    def test_rejects_bad_ttl(self, store: ResetTokenStore):
        with pytest.raises(ValueError):
            store.issue("user@example.com", ttl_seconds=0)


class TestConsume:
    def test_single_use(self, store: ResetTokenStore):
        token = store.issue("user@example.com")
        assert store.consume("user@example.com", token)
        assert not store.consume("user@example.com", token)
        assert store.pending("user@example.com") == 0

    def test_email_is_normalised(self, store: ResetTokenStore):
        token = store.issue("User@Example.com ")
        assert store.consume("user@example.com", token)

    def test_wrong_email(self, store: ResetTokenStore):
        token = store.issue("user@example.com")
        assert not store.consume("other@example.com", token)

    def test_wrong_token(self, store: ResetTokenStore):
        store.issue("user@example.com")
        assert not store.consume("user@example.com", "0" * 64)
        assert not store.consume("user@example.com", "")

    def test_expired(self, store: ResetTokenStore, digest):
        token = store.issue("user@example.com", ttl_seconds=60)
        digest.advance(60)
        assert not store.consume("user@example.com", token)


class TestCleanup:
    def test_removes_expired_and_old_used(self, store: ResetTokenStore, digest):
        used = store.issue("a@example.com", ttl_seconds=10 * USED_TOKEN_RETENTION)
        assert store.consume("a@example.com", used)
        store.issue("b@example.com", ttl_seconds=60)
        live = store.issue("c@example.com", ttl_seconds=10 * USED_TOKEN_RETENTION)

        digest.advance(USED_TOKEN_RETENTION + 1)
        result = store.cleanup()
        assert result == {"expired_tokens_removed": 1, "used_tokens_removed": 1}
        assert store.consume("c@example.com", live)

    def test_recent_used_kept(self, store: ResetTokenStore):
        token = store.issue("a@example.com")
        store.consume("a@example.com", token)
        assert store.cleanup() == {"expired_tokens_removed": 0, "used_tokens_removed": 0}


class TestConfig:
    def test_token_size_from_config(self, tmp_path: Path, config, digest):
        cfg = config.model_copy(update={"reset_token_bytes": 24})
        store = ResetTokenStore(tmp_path / "reset.db", cfg, digest=digest)
        token = store.issue("user@example.com")
        assert len(token) == 48
        assert store.consume("user@example.com", token)

    def test_connections_are_closed(self, tmp_path: Path, digest, monkeypatch):
        import sqlite3

        from bizauth import reset

        opened = []
        real_connect = sqlite3.connect

        def tracking_connect(*args, **kwargs):
            conn = real_connect(*args, **kwargs)
            opened.append(conn)
            return conn

        monkeypatch.setattr(reset.sqlite3, "connect", tracking_connect)
        store = ResetTokenStore(tmp_path / "reset.db", digest=digest)
        token = store.issue("user@example.com")
        store.pending("user@example.com")
        store.consume("user@example.com", token)
        store.cleanup()

        assert len(opened) == 5
        for conn in opened:
            with pytest.raises(sqlite3.ProgrammingError):
                conn.execute("SELECT 1")
