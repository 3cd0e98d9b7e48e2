"""Exception hierarchy for the club site.

Exception Hierarchy:
    ClubError (base)
    ├── StoreError
    │   ├── StoreReadError
    │   ├── StoreWriteError
    │   └── RecordNotFoundError
    ├── ValidationError
    ├── AuthError
    │   ├── NotAuthenticatedError
    │   └── NotAuthorizedError
    ├── InvalidTransitionError
    └── RecordBusyError

Usage:
    from clubsite.exceptions import StoreReadError

    try:
        matches = store.select(Match, order_by="date")
    except StoreReadError as e:
        logger.error(f"Could not load matches: {e}")
"""


class ClubError(Exception):
    """Base exception for all club site errors.

    Attributes:
        message: Error message
        details: Optional dictionary with additional error details
    """

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class StoreError(ClubError):
    """Base exception for data store failures."""
    pass


class StoreReadError(StoreError):
    """Raised when a read query against the store fails."""
    pass


class StoreWriteError(StoreError):
    """Raised when an insert, update or delete is not committed."""
    pass


class RecordNotFoundError(StoreError):
    """Raised when an update or delete targets a missing row."""
    pass


class ValidationError(ClubError):
    """Raised when submitted form data is rejected before any store call.

    Attributes:
        errors: Mapping of field name to a human readable message
    """

    def __init__(self, errors: dict, message: str = "Please correct the highlighted fields."):
        super().__init__(message, details={"fields": ",".join(sorted(errors))})
        self.errors = errors


class AuthError(ClubError):
    """Base exception for authentication and authorization failures."""
    pass


class NotAuthenticatedError(AuthError):
    """Raised when an action needs a signed-in session."""
    pass


class NotAuthorizedError(AuthError):
    """Raised when the session lacks the admin attribute."""
    pass


class InvalidTransitionError(ClubError):
    """Raised when an application status change is not allowed."""
    pass


class RecordBusyError(ClubError):
    """Raised when an action on a record is already in flight."""
    pass
