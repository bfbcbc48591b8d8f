"""Domain errors raised by the account services."""


class AccountError(Exception):
    """Base class for account-related failures."""


class InvalidEmail(AccountError):
    """Email is blank, malformed, or already taken by another account."""


class NotFound(AccountError):
    """Requested record does not exist."""


class ApiTokenNotFound(NotFound):
    """API token does not exist or is not owned by the user."""


class UserValidationError(AccountError):
    """One or more user attributes break an account invariant.

    ``errors`` maps attribute names to human readable messages, e.g.
    ``{"username": ["has already been taken"]}``.
    """

    def __init__(self, errors: dict[str, list[str]]):
        self.errors = errors
        details = "; ".join(f"{field} {', '.join(msgs)}" for field, msgs in errors.items())
        super().__init__(f"Invalid user: {details}")
