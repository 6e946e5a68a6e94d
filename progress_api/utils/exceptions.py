"""
Custom exceptions for the API.
"""

from fastapi import status


class APIException(Exception):
    """Base exception for API errors."""

    def __init__(self, message: str, error_code: str, status_code: int = 500):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(self.message)


class BadRequestError(APIException):
    """Raised when a required query parameter is missing or invalid."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="bad_request",
            status_code=status.HTTP_400_BAD_REQUEST
        )


class InvalidFormatError(APIException):
    """Raised when the requested output format is not recognized."""

    def __init__(self, requested: str):
        self.requested = requested
        super().__init__(
            message="Invalid format",
            error_code="invalid_format",
            status_code=status.HTTP_400_BAD_REQUEST
        )


class UpstreamError(APIException):
    """Raised when an external API fails or answers with an unusable payload."""

    def __init__(self, service: str, message: str):
        super().__init__(
            message=f"{service} API error: {message}",
            error_code="upstream_error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


class NotImplementedFeatureError(APIException):
    """Raised by endpoints that are reserved but not built yet."""

    def __init__(self, feature: str):
        super().__init__(
            message=f"{feature} is not implemented",
            error_code="not_implemented",
            status_code=status.HTTP_501_NOT_IMPLEMENTED
        )


class UnhandledFaultError(APIException):
    """Wraps an unexpected exception raised inside a handler."""

    def __init__(self, message: str = "Error occurred"):
        super().__init__(
            message=message,
            error_code="internal_error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
