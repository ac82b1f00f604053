"""bizauth configuration."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field, SecretStr, ValidationError

from bizauth.exceptions import ConfigError

DEV_JWT_SECRET = "bizauth-dev-secret-change-in-production"


class PasswordPolicy(BaseModel):
    """Password strength thresholds used by the sign-up and reset forms."""

    min_length: int = Field(default=8, ge=1)
    require_uppercase: bool = True
    require_lowercase: bool = True
    require_digit: bool = True


class AuthConfig(BaseModel):
    """Global configuration for hashing and token issuance."""

    iterations: int = Field(default=200, gt=0)
    max_iterations: int = Field(default=10_000_000, gt=0)
    key_length: int = Field(default=32, ge=1, le=32)
    salt_bytes: int = Field(default=16, ge=1)
    kdf: str = "batched-sha256"
    reset_token_bytes: int = Field(default=32, ge=16)
    jwt_secret: SecretStr = SecretStr(DEV_JWT_SECRET)
    jwt_algorithm: str = "HS256"
    token_ttl_seconds: int = Field(default=7 * 24 * 60 * 60, gt=0)
    issuer: str = "businessmanagementapp"
    password_policy: PasswordPolicy = Field(default_factory=PasswordPolicy)

    @property
    def uses_dev_secret(self) -> bool:
        return self.jwt_secret.get_secret_value() == DEV_JWT_SECRET

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> AuthConfig:
        """Build a config from ``BIZAUTH_*`` environment variables."""
        env = os.environ if environ is None else environ
        fields: dict[str, object] = {}

        mapping = {
            "BIZAUTH_JWT_SECRET": "jwt_secret",
            "BIZAUTH_ITERATIONS": "iterations",
            "BIZAUTH_KDF": "kdf",
            "BIZAUTH_TOKEN_TTL": "token_ttl_seconds",
            "BIZAUTH_ISSUER": "issuer",
        }
        for var, field in mapping.items():
            value = env.get(var)
            if value:
                fields[field] = value

        try:
            return cls(**fields)
        except ValidationError as e:
            raise ConfigError(f"Invalid BIZAUTH_* environment: {e}") from e
