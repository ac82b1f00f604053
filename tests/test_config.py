"""Tests for configuration."""

import pytest
from pydantic import ValidationError

from bizauth.config import DEV_JWT_SECRET, AuthConfig, PasswordPolicy
from bizauth.exceptions import ConfigError


class TestAuthConfig:
    def test_defaults(self):
        cfg = AuthConfig()
        assert cfg.iterations == 200
        assert cfg.key_length == 32
        assert cfg.salt_bytes == 16
        assert cfg.kdf == "batched-sha256"
        assert cfg.token_ttl_seconds == 604_800
        assert cfg.issuer == "businessmanagementapp"
        assert cfg.uses_dev_secret

    def test_secret_hidden_in_repr(self):
        cfg = AuthConfig(jwt_secret="s3cr3t-value")
        assert "s3cr3t-value" not in repr(cfg)
        assert not cfg.uses_dev_secret

    def test_rejects_bad_values(self):
        with pytest.raises(ValidationError):
            AuthConfig(iterations=0)
        with pytest.raises(ValidationError):
            AuthConfig(key_length=64)

    def test_from_env(self):
        cfg = AuthConfig.from_env(
            {
                "BIZAUTH_JWT_SECRET": "env-secret",
                "BIZAUTH_ITERATIONS": "500",
                "BIZAUTH_KDF": "pbkdf2-sha256",
                "BIZAUTH_TOKEN_TTL": "3600",
                "BIZAUTH_ISSUER": "tests",
            }
        )
        assert cfg.jwt_secret.get_secret_value() == "env-secret"
        assert cfg.iterations == 500
        assert cfg.kdf == "pbkdf2-sha256"
        assert cfg.token_ttl_seconds == 3600
        assert cfg.issuer == "tests"

    def test_from_env_empty(self):
        assert AuthConfig.from_env({}).jwt_secret.get_secret_value() == DEV_JWT_SECRET

    def test_from_env_invalid(self):
        with pytest.raises(ConfigError):
            AuthConfig.from_env({"BIZAUTH_ITERATIONS": "lots"})


class TestPasswordPolicy:
    def test_defaults(self):
        p = PasswordPolicy()
        assert p.min_length == 8
        assert p.require_uppercase and p.require_lowercase and p.require_digit
