"""
Custom Exceptions for the Hostel Booking Backend

This module defines the exception classes raised by repositories and
services. Every exception carries the HTTP status it is rendered with.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Authentication & Authorization
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    AUTHORIZATION_FAILED = "AUTHORIZATION_FAILED"
    TOKEN_INVALID = "TOKEN_INVALID"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"

    # Database errors
    DATABASE_ERROR = "DATABASE_ERROR"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"

    # Business logic errors
    BOOKING_CONFLICT = "BOOKING_CONFLICT"
    BED_OCCUPIED = "BED_OCCUPIED"
    BOOKING_ALREADY_CANCELLED = "BOOKING_ALREADY_CANCELLED"

    # Resource specific errors
    USER_NOT_FOUND = "USER_NOT_FOUND"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    BUILDING_NOT_FOUND = "BUILDING_NOT_FOUND"
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    BED_NOT_FOUND = "BED_NOT_FOUND"

    # External service errors
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "success": False,
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# Client Errors
# ========================================

class ValidationError(BaseAppException):
    """Exception raised when a required field is missing or malformed"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        status_code: int = 400
    ):
        details = {"field_errors": field_errors} if field_errors else {}
        super().__init__(message, error_code, details, status_code)


class ConflictError(BaseAppException):
    """Exception raised when an operation collides with existing state"""

    def __init__(
        self,
        message: str = "Resource conflict",
        error_code: ErrorCode = ErrorCode.DUPLICATE_ENTRY,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details, 409)


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    error_code_for_type = ErrorCode.RESOURCE_NOT_FOUND
    resource_type = "Resource"

    def __init__(
        self,
        resource_id: Optional[str] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"{self.resource_type} not found"

        details = {
            "resource_type": self.resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, self.error_code_for_type, details, 404)


class UserNotFoundError(ResourceNotFoundError):
    """Exception raised when a user is not found"""

    error_code_for_type = ErrorCode.USER_NOT_FOUND
    resource_type = "User"


class BookingNotFoundError(ResourceNotFoundError):
    """Exception raised when a booking is not found"""

    error_code_for_type = ErrorCode.BOOKING_NOT_FOUND
    resource_type = "Booking"


class BuildingNotFoundError(ResourceNotFoundError):
    """Exception raised when a building is not found"""

    error_code_for_type = ErrorCode.BUILDING_NOT_FOUND
    resource_type = "Building"


class RoomNotFoundError(ResourceNotFoundError):
    """Exception raised when a room is not found"""

    error_code_for_type = ErrorCode.ROOM_NOT_FOUND
    resource_type = "Room"


class BedNotFoundError(ResourceNotFoundError):
    """Exception raised when a bed is not found"""

    error_code_for_type = ErrorCode.BED_NOT_FOUND
    resource_type = "Bed"


# ========================================
# Authentication & Authorization
# ========================================

class AuthenticationError(BaseAppException):
    """Exception raised when a caller cannot be authenticated"""

    def __init__(
        self,
        message: str = "Authentication failed",
        error_code: ErrorCode = ErrorCode.AUTHENTICATION_FAILED,
    ):
        super().__init__(message, error_code, None, 401)


class InvalidTokenError(AuthenticationError):
    """
    Single failure class for token verification.

    Bad signatures, unexpected algorithms, expiry and malformed payloads
    all surface as this error so callers never branch on the sub-reason.
    """

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, ErrorCode.TOKEN_INVALID)


class AuthorizationError(BaseAppException):
    """Exception raised when an authenticated caller lacks the required role"""

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(message, ErrorCode.AUTHORIZATION_FAILED, None, 403)


# ========================================
# Infrastructure Errors
# ========================================

class DependencyError(BaseAppException):
    """Exception raised when a remote collaborator call fails"""

    def __init__(
        self,
        message: str = "External service call failed",
        service: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = dict(details or {})
        if service:
            details["service"] = service
        super().__init__(message, ErrorCode.EXTERNAL_SERVICE_ERROR, details, 502)


class DatabaseError(BaseAppException):
    """Exception raised when the relational store is unreachable or fails"""

    def __init__(self, message: str = "Database operation failed"):
        super().__init__(message, ErrorCode.DATABASE_ERROR, None, 503)


__all__ = [
    "ErrorCode",
    "BaseAppException",
    "ValidationError",
    "ConflictError",
    "ResourceNotFoundError",
    "UserNotFoundError",
    "BookingNotFoundError",
    "BuildingNotFoundError",
    "RoomNotFoundError",
    "BedNotFoundError",
    "AuthenticationError",
    "InvalidTokenError",
    "AuthorizationError",
    "DependencyError",
    "DatabaseError",
]
