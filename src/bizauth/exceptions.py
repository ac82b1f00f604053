"""bizauth exceptions."""


class BizAuthError(Exception):
    """Base exception for all bizauth errors."""


class ConfigError(BizAuthError):
    """Raised on invalid configuration."""


class TokenError(BizAuthError):
    """Raised when a token cannot be accepted."""


class TokenMalformed(TokenError):
    """Raised when a token is not three decodable base64url JSON segments."""

    def __init__(self, reason: str = "Malformed token"):
        self.reason = reason
        super().__init__(reason)


class TokenExpired(TokenError):
    """Raised when the ``exp`` claim is in the past."""

    def __init__(self, exp: int, now: int):
        self.exp = exp
        self.now = now
        super().__init__(f"Token expired at {exp} (now={now})")


class TokenSignatureInvalid(TokenError):
    """Raised when the signature does not match the signing key."""


class TokenIssuerMismatch(TokenError):
    """Raised when the ``iss`` claim names another issuer."""

    def __init__(self, issuer: object):
        self.issuer = issuer
        super().__init__(f"Unexpected token issuer: {issuer!r}")
