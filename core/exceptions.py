"""Custom exception classes for the goal planning service.

Every error the API can return derives from `AppException`, which carries
the HTTP status and a details dictionary rendered by the error handlers.
"""

from typing import Optional, Any, Dict, List


class AppException(Exception):
    """Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional additional error details.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Raised when a requested resource (profile, goal) does not exist."""

    def __init__(self, resource: str, identifier: Any):
        """Initialize not found error.

        Args:
            resource: Type of resource (e.g., 'UserProfile', 'NutritionGoal').
            identifier: ID or identifier that was not found.
        """
        message = f"{resource} with id '{identifier}' not found"
        super().__init__(message, status_code=404, details={"resource": resource, "id": identifier})


class ValidationError(AppException):
    """Raised when planning input is outside the accepted values."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, status_code=400, details=details)


class DatabaseError(AppException):
    """Raised when a store read or write fails."""

    def __init__(self, message: str, operation: Optional[str] = None):
        details = {"operation": operation} if operation else {}
        super().__init__(message, status_code=500, details=details)


class InsufficientDataError(AppException):
    """Raised when the profile lacks what a calorie plan needs.

    A BMR of 0 means the profile could not be evaluated; planning stops
    there instead of producing floor-only numbers.
    """

    def __init__(self, message: str, missing_fields: Optional[List[str]] = None):
        details = {"missing_fields": missing_fields} if missing_fields else {}
        super().__init__(message, status_code=400, details=details)


class ConfigurationError(AppException):
    """Raised when environment configuration is invalid."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, status_code=500, details=details)
