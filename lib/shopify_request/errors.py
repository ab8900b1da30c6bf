from __future__ import annotations


class ShopifyRequestError(Exception):
    """Base client error."""


class UnsupportedMethodError(ShopifyRequestError):
    def __init__(self, method: str):
        super().__init__(f"Request method not supported: {method}")
        self.method = method


class NetworkError(ShopifyRequestError):
    """Transport/network layer error."""


class DecodeError(ShopifyRequestError):
    """Response body is not valid JSON."""


class ApiError(ShopifyRequestError):
    def __init__(self, status_code: int, message: str, details: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class AuthError(ApiError):
    """Auth-related API error."""
