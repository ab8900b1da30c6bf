from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

__version__ = "0.1.0"

DEFAULT_USER_AGENT = f"shopify-request/{__version__}"


@dataclass(frozen=True)
class ClientConfig:
    shop_address: str
    api_key: str = ""
    api_secret: str = ""
    api_token: str = ""
    timeout_s: float = 15.0
    raw_query: bool = False
    user_agent: str = DEFAULT_USER_AGENT

    @property
    def auth_mode(self) -> str:
        return "token" if self.api_token else "basic"

    @classmethod
    def from_credentials(
            cls,
            shop_address: str,
            credentials: Mapping[str, str] | str | None = None,
            **kwargs,
    ) -> "ClientConfig":
        """Build a config from ``{api_key, api_secret, api_token}`` or a bare access token."""
        if isinstance(credentials, str):
            return cls(shop_address=shop_address, api_token=credentials, **kwargs)
        creds = credentials or {}
        return cls(
            shop_address=shop_address,
            api_key=str(creds.get("api_key") or ""),
            api_secret=str(creds.get("api_secret") or ""),
            api_token=str(creds.get("api_token") or ""),
            **kwargs,
        )
