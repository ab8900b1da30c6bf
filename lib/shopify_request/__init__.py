from .client import ShopifyRequest
from .config_types import ClientConfig
from .errors import (
    ApiError,
    AuthError,
    DecodeError,
    NetworkError,
    ShopifyRequestError,
    UnsupportedMethodError,
)
from .parsing import ParsedResponse, parse_response

__all__ = [
    "ShopifyRequest",
    "ClientConfig",
    "ParsedResponse",
    "parse_response",
    "ShopifyRequestError",
    "UnsupportedMethodError",
    "NetworkError",
    "DecodeError",
    "ApiError",
    "AuthError",
]
