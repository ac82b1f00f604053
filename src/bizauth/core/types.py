"""Core Pydantic models for bizauth."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class Role(str, Enum):
    """Account roles across the admin and company-user tables."""

    superadmin = "superadmin"
    companyadmin = "companyadmin"
    employee = "employee"
    user = "user"

    @classmethod
    def parse(cls, value: Any) -> Role | None:
        """Case-insensitive lookup. ``"admin"`` is a company admin."""
        if isinstance(value, Role):
            return value
        if not isinstance(value, str):
            return None
        key = value.strip().lower()
        if key == "admin":
            return cls.companyadmin
        try:
            return cls(key)
        except ValueError:
            return None


class UserIdentity(BaseModel):
    """The subject a token is minted for."""

    id: str
    email: str
    role: str | None = None

    @field_validator("role")
    @classmethod
    def _known_role(cls, value: str | None) -> str | None:
        # spelling is kept ("admin" stays "admin"); only unknown roles are refused
        if value and Role.parse(value) is None:
            raise ValueError(f"Unknown role: {value!r}")
        return value


class Claims(BaseModel):
    """Decoded token payload."""

    sub: str
    email: str
    role: str = Role.user.value
    iat: int
    exp: int
    iss: str

    @property
    def role_enum(self) -> Role | None:
        return Role.parse(self.role)

    def is_expired(self, now: int) -> bool:
        return self.exp < now


class ValidationResult(BaseModel):
    """Outcome of a password strength check."""

    valid: bool
    message: str


class StatusResult(BaseModel):
    """Outcome of an account status check."""

    is_active: bool
    message: str
    role: Role | None = Field(default=None)
