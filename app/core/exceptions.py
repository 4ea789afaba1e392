"""
Custom exceptions for the application.
All API exceptions should inherit from APIException for consistent error handling.
"""
from typing import Optional, Any


class APIException(Exception):
    """
    Base exception for all API errors.
    Provides consistent error response format.
    """

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: Optional[Any] = None,
    ):
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details
        super().__init__(self.message)


class UnauthorizedException(APIException):
    """401 Unauthorized"""

    def __init__(self, message: str = "Unauthorized", code: str = "UNAUTHORIZED"):
        super().__init__(401, code, message)


class ForbiddenException(APIException):
    """403 Forbidden"""

    def __init__(self, message: str = "Forbidden", code: str = "FORBIDDEN"):
        super().__init__(403, code, message)


class NotFoundException(APIException):
    """404 Not Found"""

    def __init__(self, message: str = "Resource not found", code: str = "NOT_FOUND"):
        super().__init__(404, code, message)


class JobNotFoundException(NotFoundException):
    """Job not found"""

    def __init__(self):
        super().__init__(message="Job not found", code="JOB_NOT_FOUND")


class ValidationException(APIException):
    """400 Validation Error"""

    def __init__(
        self,
        message: str = "Validation error",
        code: str = "VALIDATION_ERROR",
        details: Optional[Any] = None,
    ):
        super().__init__(400, code, message, details)


class InternalServerException(APIException):
    """500 Internal Server Error"""

    def __init__(
        self,
        message: str = "Internal server error",
        code: str = "INTERNAL_ERROR",
    ):
        super().__init__(500, code, message)


# Authentication specific exceptions
class InvalidTokenException(UnauthorizedException):
    """Token is invalid or expired"""

    def __init__(self):
        super().__init__(
            message="Invalid token",
            code="INVALID_TOKEN",
        )


# Lookup failures inside privileged flows surface as 500s carrying the message
class UserNotFoundException(InternalServerException):
    """No profile for the given email"""

    def __init__(self):
        super().__init__(message="User not found", code="USER_NOT_FOUND")


class WalletNotFoundException(InternalServerException):
    """Profile has no wallet"""

    def __init__(self):
        super().__init__(message="Wallet not found", code="WALLET_NOT_FOUND")


class ApplicationNotFoundException(InternalServerException):
    """Application not found"""

    def __init__(self):
        super().__init__(message="Application not found", code="APPLICATION_NOT_FOUND")


# Downstream providers
class ExternalServiceException(InternalServerException):
    """Auth service or email provider rejected a request."""

    def __init__(self, message: str, code: str = "EXTERNAL_SERVICE_ERROR"):
        super().__init__(message=message, code=code)


class EmailDeliveryException(ExternalServiceException):
    def __init__(self, message: str):
        super().__init__(message=message, code="EMAIL_DELIVERY_FAILED")


class MagicLinkException(ExternalServiceException):
    def __init__(self, message: str):
        super().__init__(message=message, code="MAGIC_LINK_FAILED")
