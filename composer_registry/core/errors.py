# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Custom exceptions for the composer registry.

All exceptions inherit from RegistryError for consistent error handling.
The status code on each class decides the HTTP response.
"""

from http import HTTPStatus
from typing import Optional


class RegistryError(Exception):
    """Base exception for all registry errors."""

    def __init__(self, message: str, status_code: int = 500):
        """
        Initialize registry error.

        Args:
            message: Human-readable error message
            status_code: HTTP status code
        """
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

    @property
    def headers(self) -> Optional[dict]:
        """Extra response headers for this error."""
        return None

    def to_dict(self) -> dict:
        """Convert error to dictionary for API response."""
        content = {"error": HTTPStatus(self.status_code).phrase}
        if self.message:
            content["message"] = self.message
        return content


class ValidationError(RegistryError):
    """Validation failed."""

    def __init__(self, message: str, field: Optional[str] = None):
        """
        Initialize validation error.

        Args:
            message: Validation error message
            field: Field that failed validation
        """
        super().__init__(message, status_code=400)
        self.field = field


class BadArchiveError(ValidationError):
    """Uploaded body is not a readable zip archive."""


class MissingManifestError(ValidationError):
    """No composer.json inside the uploaded archive."""


class ManifestParseError(ValidationError):
    """Manifest bytes are not a JSON object."""


class BadManifestError(ValidationError):
    """Uploaded composer.json could not be decoded."""


class MissingFieldError(ValidationError):
    """A required manifest field is absent or not a string."""

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(
            message or f"Cannot find package {field} in composer.json.",
            field=field,
        )


class InvalidPackagePathError(ValidationError):
    """A vendor, name or version cannot be used as a storage key component."""


class NotFoundError(RegistryError):
    """Resource not found."""

    def __init__(self, resource: str, identifier: str):
        """
        Initialize not found error.

        Args:
            resource: Type of resource (e.g., "Package")
            identifier: Resource identifier
        """
        message = f"{resource} not found: {identifier}"
        super().__init__(message, status_code=404)
        self.resource = resource
        self.identifier = identifier


class StorageError(RegistryError):
    """Reading or writing request bodies or stored files failed."""

    def __init__(self, message: str):
        super().__init__(message, status_code=500)


class ConfigurationError(RegistryError):
    """Configuration error."""

    def __init__(self, message: str):
        super().__init__(message, status_code=500)


class UnauthorizedError(RegistryError):
    """Unauthorized access."""

    def __init__(self, message: str = "", realm: str = "restricted"):
        """
        Initialize unauthorized error.

        Args:
            message: Error message
            realm: Basic auth realm advertised in the challenge
        """
        super().__init__(message, status_code=401)
        self.realm = realm

    @property
    def headers(self) -> Optional[dict]:
        return {"WWW-Authenticate": f'Basic realm="{self.realm}", charset="UTF-8"'}


class MethodNotAllowedError(RegistryError):
    """HTTP method not supported on this route."""

    def __init__(self, method: str, allowed: str = "POST"):
        super().__init__("", status_code=405)
        self.method = method
        self.allowed = allowed

    @property
    def headers(self) -> Optional[dict]:
        return {"Allow": self.allowed}


# Error Message Utilities

def sanitize_error_for_user(error: Exception) -> str:
    """
    Sanitize error messages for user display.
    Removes stack traces and filesystem paths.

    Args:
        error: The exception to sanitize

    Returns:
        User-friendly error message without stack trace
    """
    if isinstance(error, OSError) and error.strerror:
        # OSError.__str__ embeds the filename
        error_msg = error.strerror
    else:
        error_msg = str(error).strip() or error.__class__.__name__

    # Limit message length
    if len(error_msg) > 500:
        error_msg = error_msg[:500] + "..."

    return error_msg
