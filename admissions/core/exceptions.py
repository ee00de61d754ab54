"""Custom exception hierarchy."""


class AppError(Exception):
    """Base exception for application errors."""
    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(AppError):
    """Raised when caller-supplied input violates a required-field or enumeration rule."""
    pass


class PersistenceError(AppError):
    """Raised when the database or the storage service reports a failure."""
    pass


class StorageError(PersistenceError):
    """Raised when a Supabase Storage call fails."""
    pass


class ApplicationNotFoundError(AppError):
    """Raised when an application is not found."""
    pass
