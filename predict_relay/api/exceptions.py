"""
Custom exceptions for the prediction-market API client.

Provides a hierarchy of exceptions for different error types encountered
when talking to the upstream REST API or preparing trades for it.
"""

from typing import Any, Optional


class PredictError(Exception):
    """
    Base exception for all relay errors.

    All other exceptions inherit from this class, making it easy
    to catch any relay-related error.
    """
    pass


class PredictAPIError(PredictError):
    """
    Exception raised for errors returned by the upstream API.

    Attributes:
        status: HTTP status code
        message: Error message from the API
        response_data: Optional raw response body (parsed JSON or text)
    """

    def __init__(
        self,
        status: int,
        message: str,
        response_data: Optional[Any] = None
    ):
        self.status = status
        self.message = message
        self.response_data = response_data
        super().__init__(f"API Error {status}: {message}")


class RateLimitError(PredictAPIError):
    """
    Exception raised when API rate limits are hit.

    Check the retry_after attribute for the upstream's recommended wait time.
    """

    def __init__(
        self,
        status: int = 429,
        message: str = "Rate limit exceeded",
        response_data: Optional[Any] = None,
        retry_after: Optional[float] = None
    ):
        super().__init__(status, message, response_data)
        self.retry_after = retry_after


class AuthenticationError(PredictAPIError):
    """
    Exception raised for authentication-related errors.

    This includes an invalid API key, an expired JWT,
    and a missing Authorization header on protected endpoints.
    """
    pass


class NotFoundError(PredictAPIError):
    """
    Exception raised when a market, category or order is not found.
    """
    pass


class OrderError(PredictAPIError):
    """Exception raised when order submission or removal fails."""
    pass


class ValidationError(PredictError):
    """
    Exception raised when input validation fails.

    Check the field and message for details on what validation failed.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"Validation error for '{field}': {message}")


class ConfigurationError(PredictError):
    """
    Exception raised for configuration-related errors.

    This includes missing environment variables, invalid config values, etc.
    """
    pass


class ApprovalError(PredictError):
    """
    Exception raised when a required token approval could not be obtained.

    Attributes:
        requirement: The approval that was being requested
    """

    def __init__(self, message: str, requirement: Optional[Any] = None):
        self.message = message
        self.requirement = requirement
        super().__init__(message)
