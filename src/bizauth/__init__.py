"""bizauth: credentials and session tokens for the business management app."""

from bizauth.config import AuthConfig, PasswordPolicy
from bizauth.core.types import Claims, Role, StatusResult, UserIdentity, ValidationResult
from bizauth.passwords import (
    PasswordHasher,
    generate_reset_token,
    hash_password,
    verify_and_upgrade,
    verify_password,
)
from bizauth.tokens import TokenIssuer, generate_jwt, verify_jwt
from bizauth.validators import (
    check_user_status,
    resolve_role,
    validate_email,
    validate_password_strength,
)

__version__ = "0.1.0"
__all__ = [
    "AuthConfig",
    "Claims",
    "PasswordHasher",
    "PasswordPolicy",
    "Role",
    "StatusResult",
    "TokenIssuer",
    "UserIdentity",
    "ValidationResult",
    "check_user_status",
    "generate_jwt",
    "generate_reset_token",
    "hash_password",
    "resolve_role",
    "validate_email",
    "validate_password_strength",
    "verify_and_upgrade",
    "verify_jwt",
    "verify_password",
]
