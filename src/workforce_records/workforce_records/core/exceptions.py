class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid.

    Unknown login id and wrong password share this error and its message.
    """


class AccountDeactivatedError(AuthenticationError):
    """Raised when credentials are valid but the account is INACTIVE."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class StoreCorruptedError(Exception):
    """Raised when a persisted collection is not in the expected shape."""
