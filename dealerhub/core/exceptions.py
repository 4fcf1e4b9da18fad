"""Custom exceptions for the dealerhub application.

Every exception carries the HTTP status it maps to at the API boundary, so
services raise domain errors and never import the web framework.
"""


class DealerHubError(Exception):
    """Base exception for dealerhub application."""

    status_code = 500

    def __init__(self, message: str = "Internal server error.") -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(DealerHubError):
    """Raised when input is malformed or violates a business rule."""

    status_code = 400


class ValidationError(BadRequestError):
    """Raised when validation fails."""


class CSVParseError(BadRequestError):
    """Raised when an uploaded CSV stream cannot be parsed at all."""


class AuthenticationError(DealerHubError):
    """Raised when authentication fails."""

    status_code = 401


class AuthorizationError(DealerHubError):
    """Raised when an authenticated caller lacks a required permission."""

    status_code = 403


class ForbiddenError(AuthorizationError):
    """Raised when a caller tries to mutate a resource it does not own."""


class NotFoundError(DealerHubError):
    """Raised when a resource is not found or lies outside the caller's tenant."""

    status_code = 404


class ConflictError(DealerHubError):
    """Raised when a uniqueness rule would be violated."""

    status_code = 409


class PayloadTooLargeError(DealerHubError):
    """Raised when an uploaded file exceeds the configured size limit."""

    status_code = 413


class DatabaseError(DealerHubError):
    """Raised when a database operation fails."""


class ServiceError(DealerHubError):
    """Raised when a service operation fails."""


class ConfigurationError(DealerHubError):
    """Raised when configuration is invalid."""
