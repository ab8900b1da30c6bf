from __future__ import annotations

import base64
import logging
from collections.abc import Mapping
from typing import Any

import httpx

from .config_types import ClientConfig
from .errors import UnsupportedMethodError
from .pagination import clamp_limit, paginate_params
from .parsing import ParsedResponse, build_query, encode_json_body, parse_response
from .transport import Transport

logger = logging.getLogger(__name__)

QUERY_METHODS = frozenset({"GET", "DELETE"})
BODY_METHODS = frozenset({"POST", "PUT"})
SUPPORTED_METHODS = QUERY_METHODS | BODY_METHODS

ACCESS_TOKEN_HEADER = "X-Shopify-Access-Token"


class ShopifyRequest:
    """Executes one GET/POST/PUT/DELETE call against a shop's REST Admin API.

    A non-empty ``api_token`` wins over key/secret.
    """

    def __init__(self, cfg: ClientConfig, *, transport: httpx.BaseTransport | None = None):
        self._cfg = cfg
        self._t = Transport(cfg, transport)

    @classmethod
    def from_credentials(
            cls,
            shop_address: str,
            credentials: Mapping[str, str] | str | None = None,
            *,
            timeout_s: float = 15.0,
            raw_query: bool = False,
            transport: httpx.BaseTransport | None = None,
    ) -> "ShopifyRequest":
        """``credentials`` is ``{"api_key", "api_secret", "api_token"}`` (any key
        may be missing) or a bare access token string."""
        cfg = ClientConfig.from_credentials(
            shop_address,
            credentials,
            timeout_s=timeout_s,
            raw_query=raw_query,
        )
        return cls(cfg, transport=transport)

    @property
    def config(self) -> ClientConfig:
        return self._cfg

    def auth_headers(self) -> dict[str, str]:
        if not self._cfg.api_token:
            pair = f"{self._cfg.api_key}:{self._cfg.api_secret}".encode("utf-8")
            return {"Authorization": "Basic " + base64.b64encode(pair).decode("ascii")}
        return {ACCESS_TOKEN_HEADER: self._cfg.api_token}

    def make_request(
            self,
            endpoint: str,
            method: str,
            params: Mapping[str, Any] | None = None,
            page_info: str = "",
            limit: int = 50,
    ) -> ParsedResponse:
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise UnsupportedMethodError(method)

        url = self._cfg.shop_address + endpoint
        headers = self.auth_headers()

        if page_info:
            final_params = paginate_params(params or {}, page_info)
        else:
            final_params = dict(params or {})
        final_params["limit"] = clamp_limit(limit)

        content = None
        if method in QUERY_METHODS:
            url = f"{url}?{build_query(final_params, encode=not self._cfg.raw_query)}"
        else:
            content = encode_json_body(final_params)
            headers["Content-Type"] = "application/json"
            headers["Content-Length"] = str(len(content))

        raw = self._t.execute(method, url, headers, content=content)
        return parse_response(raw.text, status_code=raw.status_code)

    def get(self, endpoint: str, params: Mapping[str, Any] | None = None, *, page_info: str = "",
            limit: int = 50) -> ParsedResponse:
        return self.make_request(endpoint, "GET", params, page_info, limit)

    def delete(self, endpoint: str, params: Mapping[str, Any] | None = None, *, limit: int = 50) -> ParsedResponse:
        return self.make_request(endpoint, "DELETE", params, limit=limit)

    def post(self, endpoint: str, params: Mapping[str, Any] | None = None, *, limit: int = 50) -> ParsedResponse:
        return self.make_request(endpoint, "POST", params, limit=limit)

    def put(self, endpoint: str, params: Mapping[str, Any] | None = None, *, limit: int = 50) -> ParsedResponse:
        return self.make_request(endpoint, "PUT", params, limit=limit)
