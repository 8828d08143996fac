"""Custom exception classes for the ITS backend.

Services raise these; the HTTP layer maps each class to its status code in a
single exception handler (see ``app.py``).
"""


class ItsError(Exception):
    """Base exception for all ITS backend errors."""

    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        """Initialize the exception.

        Args:
            message: Human-readable message returned to the client.
        """
        self.message = message
        super().__init__(message)


class ValidationFailedError(ItsError):
    """Raised when request data does not satisfy a DTO constraint."""

    status_code = 400


class InvalidCredentialsError(ItsError):
    """Raised on any login failure.

    The message is identical for unknown email, wrong password and inactive
    account.
    """

    status_code = 400

    def __init__(self):
        super().__init__("Invalid credentials")


class EmailTakenError(ItsError):
    """Raised when registering an email that already belongs to a user."""

    status_code = 400

    def __init__(self, email: str):
        """Initialize the exception.

        Args:
            email: The email address that is already registered.
        """
        self.email = email
        super().__init__("Email already exists")


class UnauthorizedError(ItsError):
    """Raised when a protected route is called without a valid principal."""

    status_code = 401

    def __init__(self, message: str = "Invalid authentication credentials"):
        super().__init__(message)


class InvalidTokenError(UnauthorizedError):
    """Raised when a bearer token fails signature, structure or expiry checks."""

    pass


class ForbiddenError(ItsError):
    """Raised when the caller's role or ownership does not permit an action."""

    status_code = 403

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)


class NotFoundError(ItsError):
    """Raised when a referenced entity does not exist."""

    status_code = 404

    def __init__(self, entity: str, entity_id: str):
        """Initialize the exception.

        Args:
            entity: Human-readable entity name, e.g. ``"Course"``.
            entity_id: The identifier that was looked up.
        """
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} '{entity_id}' not found")


class ConcurrentUpdateError(ItsError):
    """Raised when a versioned write keeps losing to concurrent writers."""

    status_code = 409


class UploadFailedError(ItsError):
    """Raised when an uploaded file cannot be written to the upload directory."""

    status_code = 400

    def __init__(self, message: str = "Failed to upload file"):
        super().__init__(message)


class ConfigurationError(ItsError):
    """Raised when there is a configuration error."""

    pass
