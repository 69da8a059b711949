"""
Exception hierarchy for the Firefli session core.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class FirefliException(Exception):
    """Base exception for all Firefli application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class AuthorizationError(FirefliException):
    """Raised when a token or shared secret does not map to a caller."""


class ValidationError(FirefliException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class SessionNotFoundError(FirefliException):
    """Raised when no active activity session exists for a user."""

    def __init__(self, user_id: int, details: dict[str, Any] | None = None) -> None:
        """
        Initialize session not found error.

        Args:
            user_id: Roblox user ID without an active session
            details: Additional context
        """
        details = details or {}
        details["user_id"] = user_id
        super().__init__(f"No active session for user {user_id}", details)


class IntegrationError(FirefliException):
    """Base exception for outbound integration failures."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize integration error.

        Args:
            message: Error message
            operation: Operation that failed (send, edit, lookup)
            status_code: HTTP status returned by the remote service
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        if status_code is not None:
            details["status_code"] = status_code
        self.status_code = status_code
        super().__init__(message, details)


class NotificationDeliveryError(IntegrationError):
    """Raised when a Discord message send or edit fails or times out."""


class RobloxAPIError(IntegrationError):
    """Raised when a Roblox lookup fails."""


class RobloxRateLimitError(RobloxAPIError):
    """Raised when Roblox answers 429; retried by the client."""
