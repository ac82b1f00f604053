"""bizauth core types and key derivation."""

from bizauth.core.kdf import KDFS, derive_key_batched, derive_key_pbkdf2, get_kdf
from bizauth.core.types import Claims, Role, StatusResult, UserIdentity, ValidationResult

__all__ = [
    "KDFS",
    "Claims",
    "Role",
    "StatusResult",
    "UserIdentity",
    "ValidationResult",
    "derive_key_batched",
    "derive_key_pbkdf2",
    "get_kdf",
]
