"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error class."""

    def __init__(self, message, status_code=400):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ValidationError(AppError):
    """Raised when user input fails validation."""

    def __init__(self, message="Data tidak valid"):
        """Initialize the error."""
        super().__init__(message, 400)


class UnauthorizedError(AppError):
    """Raised when a request carries no valid bearer token."""

    def __init__(self, message="Unauthorized"):
        """Initialize the error."""
        super().__init__(message, 401)


class ForbiddenError(AppError):
    """Raised when the caller is authenticated but not allowed to act."""

    def __init__(self, message="Tidak memiliki izin"):
        """Initialize the error."""
        super().__init__(message, 403)


class NotFoundError(AppError):
    """Raised when a resource is not found."""

    def __init__(self, message="Data tidak ditemukan"):
        """Initialize the error."""
        super().__init__(message, 404)


class DuplicateResourceError(AppError):
    """Raised when trying to create a resource that already exists."""

    def __init__(self, message="Data sudah ada"):
        """Initialize the error."""
        super().__init__(message, 409)


class UpstreamError(AppError):
    """Raised when the store or the auth provider fails unexpectedly."""

    def __init__(self, message="Terjadi kesalahan pada server"):
        """Initialize the error."""
        super().__init__(message, 500)
