"""Custom exceptions for the construction carbon engine."""

from typing import Optional


class CarbonEngineException(Exception):
    """
    Base exception for the construction carbon engine.

    Attributes:
        message: Human-readable description of the error.
        error_code: Machine-readable code identifying the error type.
        status_code: Suggested HTTP status code when translating to an HTTP response.
    """
    error_code: str = "unknown_error"
    status_code: int = 500

    def __init__(self, message: Optional[str] = None):
        # Use the class docstring as a default message if none provided
        default_msg = self.__class__.__doc__.strip().splitlines()[0] if self.__class__.__doc__ else ""
        self.message = message or default_msg
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class InvalidInputException(CarbonEngineException):
    "Raised when a material, transport, energy or waste input is invalid."
    error_code = "invalid_input"
    status_code = 400


class UnknownRegionException(CarbonEngineException):
    "Raised when a country has no registered regional configuration."
    error_code = "unknown_region"
    status_code = 404


class UnknownStandardException(CarbonEngineException):
    "Raised when a compliance standard id is not in the catalog."
    error_code = "unknown_standard"
    status_code = 404


class ScoringException(CarbonEngineException):
    "Raised when scoring calculation fails."
    error_code = "scoring_error"
    status_code = 500


class ProviderTimeoutException(CarbonEngineException):
    "Raised when the recommendation provider does not answer in time."
    error_code = "provider_timeout"
    status_code = 504


class ProviderMalformedResponseException(CarbonEngineException):
    "Raised when the recommendation provider returns an unparseable report."
    error_code = "provider_malformed_response"
    status_code = 502


# Public API
__all__ = [
    "CarbonEngineException",
    "InvalidInputException",
    "UnknownRegionException",
    "UnknownStandardException",
    "ScoringException",
    "ProviderTimeoutException",
    "ProviderMalformedResponseException",
]
