"""Form and account validators."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from bizauth.config import AuthConfig, PasswordPolicy
from bizauth.core.types import Role, StatusResult, ValidationResult

_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

Record = Mapping[str, Any]


def validate_email(email: object) -> bool:
    return isinstance(email, str) and bool(_EMAIL.match(email))


def validate_password_strength(
    password: str,
    policy: PasswordPolicy | None = None,
    *,
    config: AuthConfig | None = None,
) -> ValidationResult:
    """Check a new password. The first failing rule wins.

    Uses *policy* when given, otherwise the ``password_policy`` of *config*.
    """
    policy = policy or (config or AuthConfig()).password_policy

    if len(password) < policy.min_length:
        return ValidationResult(
            valid=False,
            message=f"Password must be at least {policy.min_length} characters long",
        )

    if policy.require_uppercase and not re.search(r"[A-Z]", password):
        return ValidationResult(
            valid=False, message="Password must contain at least one uppercase letter"
        )

    if policy.require_lowercase and not re.search(r"[a-z]", password):
        return ValidationResult(
            valid=False, message="Password must contain at least one lowercase letter"
        )

    if policy.require_digit and not re.search(r"[0-9]", password):
        return ValidationResult(valid=False, message="Password must contain at least one number")

    return ValidationResult(valid=True, message="Password is strong")


def check_user_status(admin: Record | None, company_user: Record | None) -> StatusResult:
    """Decide whether an account may sign in.

    A super admin's ``status`` flag takes priority over any company-user
    row; otherwise the company user's ``active_status`` must be ``"active"``.
    """
    if admin and Role.parse(admin.get("role")) is Role.superadmin:
        active = admin.get("status") is True
        return StatusResult(
            is_active=active,
            message=f"Super admin account is {'active' if active else 'disabled'}",
            role=Role.superadmin,
        )

    if company_user:
        active = company_user.get("active_status") == "active"
        return StatusResult(
            is_active=active,
            message="Account is active" if active else "Account is not active",
            role=Role.parse(company_user.get("role")),
        )

    return StatusResult(is_active=False, message="User not found")


def resolve_role(admin: Record | None, company_user: Record | None) -> Role | None:
    """Role lookup order used at sign-in: admin table first, then company users."""
    for record in (admin, company_user):
        if record:
            role = Role.parse(record.get("role"))
            if role is not None:
                return role
    return None
