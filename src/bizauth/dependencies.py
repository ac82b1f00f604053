"""FastAPI authentication dependencies."""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request

from bizauth.core.types import Claims, Role
from bizauth.exceptions import TokenError, TokenExpired
from bizauth.tokens import get_default_issuer


def require_claims(request: Request) -> Claims:
    """FastAPI dependency: verify the Bearer token. Returns its claims."""
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        raise HTTPException(401, "Authentication required. Provide a Bearer token.")

    try:
        claims = get_default_issuer().verify(auth_header[7:])
    except TokenExpired:
        raise HTTPException(401, "Token expired") from None
    except TokenError:
        raise HTTPException(401, "Invalid token") from None

    request.state.claims = claims
    return claims


def require_role(*roles: Role | str):
    """Dependency factory: 403 unless the token's role is one of *roles*."""
    allowed = {Role.parse(r) for r in roles} - {None}

    def dependency(claims: Claims = Depends(require_claims)) -> Claims:
        if claims.role_enum not in allowed:
            raise HTTPException(403, "Insufficient role")
        return claims

    return dependency
