"""
Exception handling framework for the LifeMatch service.

This module defines the error taxonomy shared by the access gate, the
repositories and the matchmaking state machine:
1. Every error carries a stable error code and a user-facing message
2. Errors log themselves with context when raised
3. Sensitive context values are redacted before logging
4. ``handle_error`` turns any exception into the standard response payload
"""
from typing import Any, Dict, Optional
import logging
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


class LifeMatchError(Exception):
    """Base exception for all application errors."""

    status_code: int = 500
    log_level: int = logging.ERROR

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        user_message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        """Initialize the error with context and logging.

        Args:
            message: Technical error message for logging
            error_code: Unique error code for tracking
            user_message: User-friendly error message
            context: Additional context for debugging
            original_error: Original exception if this wraps another error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.user_message = user_message or message
        self.original_error = original_error
        self.timestamp = datetime.now(timezone.utc)

        # Add standard context
        self.context = dict(context or {})
        self.context.update({
            "error_code": error_code,
            "timestamp": self.timestamp.isoformat(),
            "error_type": self.__class__.__name__,
        })

        self._log_error()

    def _log_error(self) -> None:
        """Log the error with context."""
        logger.log(
            self.log_level,
            self.message,
            extra={
                "error_context": self.context,
                "original_error": str(self.original_error) if self.original_error else None,
            },
            exc_info=self.original_error,
        )


class UnauthorizedError(LifeMatchError):
    """Caller's role or ownership does not permit the operation."""

    status_code = 403
    log_level = logging.WARNING

    def __init__(
        self,
        message: str,
        identity: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize unauthorized error."""
        context = dict(context or {})
        context.update({"identity": identity, "operation": operation})
        super().__init__(
            message=message,
            error_code="UNAUTHORIZED",
            user_message="You are not allowed to perform this action",
            context=context,
        )


class NotFoundError(LifeMatchError):
    """Referenced entity does not exist."""

    status_code = 404
    log_level = logging.INFO

    def __init__(
        self,
        message: str,
        entity: str,
        key: Any = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize not found error."""
        context = dict(context or {})
        context.update({"entity": entity, "key": key})
        super().__init__(
            message=message,
            error_code="NOT_FOUND",
            user_message=f"{entity} not found",
            context=context,
        )


class ConflictError(LifeMatchError):
    """Operation would duplicate an entity that must be unique."""

    status_code = 409
    log_level = logging.INFO

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        """Initialize conflict error."""
        super().__init__(
            message=message,
            error_code="CONFLICT",
            user_message=message,
            context=context,
            original_error=original_error,
        )


class InvalidStateError(LifeMatchError):
    """State-machine transition attempted from a terminal or wrong state."""

    status_code = 409
    log_level = logging.INFO

    def __init__(
        self,
        message: str,
        current_state: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize invalid state error."""
        context = dict(context or {})
        context["current_state"] = current_state
        super().__init__(
            message=message,
            error_code="INVALID_STATE",
            user_message=message,
            context=context,
        )


class InvalidInputError(LifeMatchError):
    """Malformed ranges or missing required fields."""

    status_code = 400
    log_level = logging.INFO

    def __init__(
        self,
        message: str,
        field: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize validation error."""
        context = dict(context or {})
        context["field"] = field
        self.field = field
        super().__init__(
            message=message,
            error_code="INVALID_INPUT",
            user_message=f"Invalid data provided for {field}: {message}",
            context=context,
        )


class DatabaseError(LifeMatchError):
    """Database-related errors."""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        """Initialize database error."""
        super().__init__(
            message=message,
            error_code="DB_ERROR",
            user_message="A database error occurred",
            context=self._sanitize_context(context),
            original_error=original_error,
        )

    def _sanitize_context(self, context: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Remove sensitive information from context."""
        if not context:
            return {}

        # Create a copy to avoid modifying the original
        safe_context = context.copy()

        sensitive_fields = {"password", "token", "secret", "key"}
        for field in sensitive_fields:
            if field in safe_context:
                safe_context[field] = "[REDACTED]"

        return safe_context


def handle_error(error: Exception) -> Dict[str, Any]:
    """Convert any error to a standardized response format.

    Args:
        error: The exception to handle

    Returns:
        Dict containing error details in a standard format
    """
    if isinstance(error, LifeMatchError):
        return {
            "success": False,
            "error_code": error.error_code,
            "error": error.user_message,
            "details": error.context,
        }

    # Wrap unknown errors
    wrapped_error = LifeMatchError(
        message=str(error),
        error_code="UNKNOWN_ERROR",
        user_message="An unexpected error occurred",
        original_error=error,
    )

    return {
        "success": False,
        "error_code": wrapped_error.error_code,
        "error": wrapped_error.user_message,
        "details": wrapped_error.context,
    }
