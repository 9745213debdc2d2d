"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions. Every exception carries a
stable ``kind`` (the error category) and a machine-readable ``code``.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    kind = "domain_error"

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class UnauthorizedError(DomainException):
    """Raised when no authenticated owner is present."""

    kind = "unauthorized"

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, code="UNAUTHORIZED")


class NotFoundError(DomainException):
    """
    Base exception for missing or not-owned resources.

    Used for both truly absent and foreign resources so that
    callers cannot probe for existence.
    """

    kind = "not_found"

    def __init__(self, message: str = "Resource not found", code: str = "NOT_FOUND"):
        super().__init__(message, code=code)


class ApplicationNotFoundError(NotFoundError):
    """Raised when an application is not found or not owned by the caller."""

    def __init__(self, message: str = "Application not found"):
        super().__init__(message, code="APPLICATION_NOT_FOUND")


class LicenseNotFoundError(NotFoundError):
    """Raised when a license is not found in the application."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class AppUserNotFoundError(NotFoundError):
    """Raised when an application user is not found in the application."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message, code="USER_NOT_FOUND")


class UserVarNotFoundError(NotFoundError):
    """Raised when a user variable does not exist."""

    def __init__(self, message: str = "User variable not found"):
        super().__init__(message, code="USER_VAR_NOT_FOUND")


class InvalidInputError(DomainException):
    """Raised when required fields are missing or malformed."""

    kind = "invalid_input"

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, code="INVALID_INPUT")


class ConflictError(DomainException):
    """Base exception for uniqueness conflicts."""

    kind = "conflict"

    def __init__(self, message: str = "Conflict", code: str = "CONFLICT"):
        super().__init__(message, code=code)


class UsernameTakenError(ConflictError):
    """Raised when a username already exists within an application."""

    def __init__(self, message: str = "Username already exists"):
        super().__init__(message, code="USERNAME_TAKEN")
