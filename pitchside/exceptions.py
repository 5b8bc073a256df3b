"""
Custom exceptions for the statistics provider boundary.
"""
from __future__ import annotations


class APIClientError(RuntimeError):
    """
    Generic provider client error.
    """

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class APIRateLimitError(APIClientError):
    """
    Raised when the provider indicates that a rate limit has been hit.
    """


class APINotFoundError(APIClientError):
    """
    Raised when a requested player or resource does not exist upstream.
    """


class ProviderDataError(APIClientError):
    """
    Raised when a provider payload is missing a field the adapters require.
    """
