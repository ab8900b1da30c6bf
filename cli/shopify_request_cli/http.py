from __future__ import annotations

from shopify_request import ShopifyRequest
from shopify_request.config_types import ClientConfig

from .config import AppConfig, apply_env, apply_profile, normalize_shop_address


def make_client(
    cfg: AppConfig,
    *,
    profile: str | None,
    shop_override: str | None,
) -> ShopifyRequest:
    effective_cfg = apply_env(apply_profile(cfg, profile))
    shop_address = normalize_shop_address(shop_override or effective_cfg.shop_address, warn=True)
    creds = effective_cfg.credentials
    return ShopifyRequest(
        ClientConfig(
            shop_address=shop_address,
            api_key=creds.api_key,
            api_secret=creds.api_secret,
            api_token=creds.api_token,
            timeout_s=effective_cfg.timeout_s,
            raw_query=effective_cfg.raw_query,
        )
    )
