class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class UnauthorizedAccessError(DomainError):
    """Raised when a caller lacks the role or ownership for an action."""


class ResourceNotFoundError(DomainError):
    """Raised when an entity lookup misses."""


class DuplicateResourceError(DomainError):
    """Raised when a unique constraint (username, email, user/date) would be violated."""


class PayrollProcessingError(DomainError):
    """Raised on unauthorized payroll access or invalid computation input."""

    def __init__(self, message: str, *, access_denied: bool = False):
        super().__init__(message)
        self.access_denied = access_denied


class TokenError(AuthenticationError):
    """Base class for token verification failures."""


class TokenInvalidError(TokenError):
    """Signature mismatch or missing required claims."""


class TokenExpiredError(TokenError):
    """Token is past its expiration."""


class TokenMalformedError(TokenError):
    """Token cannot be parsed at all."""
