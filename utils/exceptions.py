"""
Custom exception classes for Appwrite operations and the seeder.
"""
from typing import Optional, Any


class AppwriteOperationError(Exception):
    """Exception raised when an Appwrite-backed operation fails."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        code: Optional[int] = None,
        error_type: Optional[str] = None
    ):
        """
        Initialize Appwrite operation error.

        Args:
            message: Error message
            operation: Operation name if available
            code: HTTP status code reported by Appwrite if available
            error_type: Appwrite error type (e.g. 'user_already_exists') if available
        """
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.code = code
        self.error_type = error_type


class ImageFetchError(Exception):
    """Exception raised when an image cannot be downloaded."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message)
        self.message = message
        self.url = url
        self.status_code = status_code


class SeedingError(Exception):
    """Exception raised for seeding failures."""

    def __init__(self, message: str, stage: Optional[str] = None):
        """
        Initialize seeding error.

        Args:
            message: Error message
            stage: Seeding stage that failed (e.g. 'connection', 'menu')
        """
        super().__init__(message)
        self.message = message
        self.stage = stage


class ValidationError(Exception):
    """Exception raised for validation errors."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None
    ):
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation if available
            value: Invalid value if available
        """
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value
