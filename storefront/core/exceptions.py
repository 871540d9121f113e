# storefront/core/exceptions.py

from enum import Enum
from typing import Optional, Dict, Any
import logging
from fastapi import status

logger = logging.getLogger(__name__)

class ErrorCode(Enum):
    """Standardized error codes for the storefront."""

    NOT_FOUND = "NOT_FOUND"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_INPUT = "INVALID_INPUT"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


STATUS_CODE_MAP = {
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.DUPLICATE_EMAIL: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.STORE_UNAVAILABLE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.INTERNAL_SERVER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class StorefrontError(Exception):
    """Base exception for all storefront errors."""

    log_level = logging.WARNING

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        technical_details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.code = code
        self.user_message = user_message
        self.technical_details = technical_details
        self.context = context or {}

        logger.log(
            self.log_level,
            f"Storefront Error: {code.value}",
            extra={
                "error_code": code.value,
                "user_message": user_message,
                "technical_details": technical_details,
                "context": self.context,
            }
        )

        super().__init__(self.user_message)

    @property
    def status_code(self) -> int:
        return STATUS_CODE_MAP.get(self.code, status.HTTP_400_BAD_REQUEST)

    def to_response(self) -> Dict[str, Any]:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.user_message,
                "context": self.context
            }
        }


class NotFoundError(StorefrontError):
    """A product or user lookup came back empty."""

    def __init__(self, user_message: str = "Not found", context: Optional[Dict[str, Any]] = None):
        super().__init__(ErrorCode.NOT_FOUND, user_message, context=context)


class ProductNotFoundError(NotFoundError):
    def __init__(self, product_id: int):
        super().__init__(f"Product {product_id} not found", context={"product_id": product_id})


class UserNotFoundError(NotFoundError):
    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class DuplicateEmailError(StorefrontError):
    def __init__(self, email: str):
        super().__init__(
            ErrorCode.DUPLICATE_EMAIL,
            "An account with this email already exists",
            context={"email": email},
        )


class InvalidCredentialsError(StorefrontError):
    """Password mismatch. The message never says which field was wrong."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(ErrorCode.INVALID_CREDENTIALS, message)


class InvalidInputError(StorefrontError):
    def __init__(self, parameter_name: str, parameter_value: Any, expected_format: str):
        super().__init__(
            ErrorCode.INVALID_INPUT,
            f"Invalid value for '{parameter_name}': {parameter_value}. Expected: {expected_format}",
            context={
                "parameter_name": parameter_name,
                "parameter_value": str(parameter_value),
                "expected_format": expected_format
            },
        )


class StoreUnavailableError(StorefrontError):
    """Database or session store could not be reached."""

    log_level = logging.ERROR

    def __init__(self, operation: str, technical_details: Optional[str] = None):
        super().__init__(
            ErrorCode.STORE_UNAVAILABLE,
            "Server error",
            technical_details=technical_details,
            context={"operation": operation},
        )

    def to_response(self) -> Dict[str, Any]:
        # Store internals stay in the logs
        return {
            "error": {
                "code": self.code.value,
                "message": self.user_message,
            }
        }
