"""
Error taxonomy for the Botify Agent system.

Every failure that crosses the tool boundary is converted into an AppError
carrying one of the ErrorType categories, so callers can produce user-safe
messages while the logs keep the full detail.
"""
import logging
from enum import Enum
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

__all__ = [
    "ErrorType",
    "ErrorContext",
    "AppError",
    "AuthenticationError",
    "AuthorizationError",
    "ValidationError",
    "NotFoundError",
    "ExternalServiceError",
    "InternalError",
    "AgentExecutionError",
    "SpotifyAPIError",
    "classify_error",
    "handle_error",
    "user_friendly_message",
]


class ErrorType(str, Enum):
    """Categories used to classify failures."""
    AUTHENTICATION = "AUTHENTICATION"
    AUTHORIZATION = "AUTHORIZATION"
    VALIDATION = "VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    EXTERNAL_SERVICE = "EXTERNAL_SERVICE"
    INTERNAL = "INTERNAL"


class ErrorContext(BaseModel):
    """Where an error happened."""

    user_id: Optional[str] = Field(None, description="User the operation ran for")
    operation: Optional[str] = Field(None, description="Tool or service operation name")
    additional_data: Dict[str, Any] = Field(default_factory=dict)


class AppError(Exception):
    """Application error with a classification and context."""

    error_type: ErrorType = ErrorType.INTERNAL

    def __init__(
        self,
        message: str,
        error_type: Optional[ErrorType] = None,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(message)
        self.message = message
        if error_type is not None:
            self.error_type = error_type
        self.context = context or ErrorContext()

    def __str__(self) -> str:
        return self.message


class AuthenticationError(AppError):
    error_type = ErrorType.AUTHENTICATION


class AuthorizationError(AppError):
    error_type = ErrorType.AUTHORIZATION


class ValidationError(AppError):
    """Raised when tool arguments do not satisfy their schema."""

    error_type = ErrorType.VALIDATION

    def __init__(
        self,
        message: str,
        errors: Optional[list] = None,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(message, context=context)
        # [{"field": ..., "constraint": ...}]
        self.errors = errors or []


class NotFoundError(AppError):
    error_type = ErrorType.NOT_FOUND


class ExternalServiceError(AppError):
    error_type = ErrorType.EXTERNAL_SERVICE


class InternalError(AppError):
    error_type = ErrorType.INTERNAL


class AgentExecutionError(AppError):
    """Raised when the LLM tool-calling engine fails to produce a reply."""

    error_type = ErrorType.INTERNAL


class SpotifyAPIError(Exception):
    """Non-2xx response from the Spotify Web API or accounts service."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"Spotify API error {status_code}: {message}")
        self.status_code = status_code
        self.message = message


_STATUS_TYPES = {
    400: ErrorType.VALIDATION,
    401: ErrorType.AUTHENTICATION,
    403: ErrorType.AUTHORIZATION,
    404: ErrorType.NOT_FOUND,
    422: ErrorType.VALIDATION,
    429: ErrorType.EXTERNAL_SERVICE,
}

_MESSAGE_PATTERNS = [
    (("authorization", "unauthorized"), ErrorType.AUTHENTICATION),
    (("forbidden", "access denied"), ErrorType.AUTHORIZATION),
    (("not found", "does not exist"), ErrorType.NOT_FOUND),
    (("validation", "invalid"), ErrorType.VALIDATION),
    (("network", "timeout", "timed out", "connection refused"), ErrorType.EXTERNAL_SERVICE),
]

_USER_MESSAGES = {
    ErrorType.AUTHENTICATION: "Please reconnect your Spotify account to continue.",
    ErrorType.AUTHORIZATION: "You do not have permission to perform this action.",
    ErrorType.EXTERNAL_SERVICE: "Spotify service is temporarily unavailable. Please try again later.",
    ErrorType.INTERNAL: "An unexpected error occurred. Please try again.",
}


def classify_error(error: BaseException) -> ErrorType:
    """Map an arbitrary exception onto the error taxonomy."""
    if isinstance(error, AppError):
        return error.error_type

    if isinstance(error, SpotifyAPIError):
        if error.status_code >= 500:
            return ErrorType.EXTERNAL_SERVICE
        if error.status_code in _STATUS_TYPES:
            return _STATUS_TYPES[error.status_code]

    if isinstance(error, httpx.TransportError):
        return ErrorType.EXTERNAL_SERVICE

    message = str(error).lower()
    for patterns, error_type in _MESSAGE_PATTERNS:
        if any(pattern in message for pattern in patterns):
            return error_type

    return ErrorType.INTERNAL


def handle_error(
    error: BaseException, context: Optional[ErrorContext] = None
) -> AppError:
    """Convert an exception into a classified AppError and log it.

    Args:
        error: The exception that was raised
        context: Where it happened (user id, operation)

    Returns:
        The classified AppError; an AppError passed in is returned as is,
        with any missing context filled in
    """
    context = context or ErrorContext()

    if isinstance(error, AppError):
        app_error = error
        if app_error.context.user_id is None:
            app_error.context.user_id = context.user_id
        if app_error.context.operation is None:
            app_error.context.operation = context.operation
    else:
        error_type = classify_error(error)
        message = getattr(error, "message", None) or str(error) or type(error).__name__
        app_error = _ERROR_CLASSES[error_type](message, context=context)

    logger.error(
        f"Error in {app_error.context.operation} for user {app_error.context.user_id}: "
        f"[{app_error.error_type.value}] {app_error.message}",
        exc_info=error,
    )
    return app_error


def user_friendly_message(error: AppError) -> str:
    """Return a message that is safe to show to the chat user."""
    if error.error_type == ErrorType.VALIDATION:
        return f"Invalid input: {error.message}"
    if error.error_type == ErrorType.NOT_FOUND:
        return f"Requested resource not found: {error.message}"
    return _USER_MESSAGES[error.error_type]


_ERROR_CLASSES = {
    ErrorType.AUTHENTICATION: AuthenticationError,
    ErrorType.AUTHORIZATION: AuthorizationError,
    ErrorType.VALIDATION: ValidationError,
    ErrorType.NOT_FOUND: NotFoundError,
    ErrorType.EXTERNAL_SERVICE: ExternalServiceError,
    ErrorType.INTERNAL: InternalError,
}
