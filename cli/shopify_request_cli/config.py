from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field, replace
from typing import Any

import tomli_w
from platformdirs import user_config_dir

from . import console

APP_NAME = "shopify-request"
CONFIG_FILENAME = "config.toml"
DEFAULT_TIMEOUT_S = 15.0

ENV_SHOP_ADDRESS = "SHOPIFY_SHOP_ADDRESS"
ENV_API_KEY = "SHOPIFY_API_KEY"
ENV_API_SECRET = "SHOPIFY_API_SECRET"
ENV_API_TOKEN = "SHOPIFY_API_TOKEN"

_WARNED_SHOP_SCHEME = False


@dataclass
class CredentialsConfig:
    api_key: str = ""
    api_secret: str = ""
    api_token: str = ""

    def as_mapping(self) -> dict[str, str]:
        return {"api_key": self.api_key, "api_secret": self.api_secret, "api_token": self.api_token}


@dataclass
class AppConfig:
    shop_address: str = ""
    credentials: CredentialsConfig = field(default_factory=CredentialsConfig)
    timeout_s: float = DEFAULT_TIMEOUT_S
    raw_query: bool = False


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig()


def normalize_shop_address(raw: str | None, *, warn: bool = False) -> str:
    value = (raw or "").strip()
    if not value:
        return ""
    value = value.rstrip("/")
    lowered = value.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return value

    normalized = f"https://{value}"
    if warn:
        _warn_missing_scheme(normalized)
    return normalized


def _warn_missing_scheme(normalized: str) -> None:
    global _WARNED_SHOP_SCHEME
    if _WARNED_SHOP_SCHEME:
        return
    if not _is_interactive():
        return
    console.warn(f"shop_address missing scheme, assuming {normalized}")
    _WARNED_SHOP_SCHEME = True


def _is_interactive() -> bool:
    import sys
    return bool(sys.stderr.isatty() or sys.stdout.isatty())


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def _credentials_from(raw: Any, base: CredentialsConfig) -> CredentialsConfig:
    # A credentials table replaces the whole set; fields never leak in from base.
    if not isinstance(raw, dict) or not raw:
        return base
    return CredentialsConfig(
        api_key=str(raw.get("api_key") or ""),
        api_secret=str(raw.get("api_secret") or ""),
        api_token=str(raw.get("api_token") or ""),
    )


def _timeout_from(raw: Any, default: float) -> float:
    if raw is None:
        return default
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    return {
        "shop_address": cfg.shop_address,
        "timeout_s": cfg.timeout_s,
        "raw_query": cfg.raw_query,
        "credentials": cfg.credentials.as_mapping(),
    }


def from_toml(data: dict[str, Any]) -> AppConfig:
    raw_query = data.get("raw_query")
    return AppConfig(
        shop_address=normalize_shop_address(str(data.get("shop_address") or ""), warn=True),
        credentials=_credentials_from(data.get("credentials"), CredentialsConfig()),
        timeout_s=_timeout_from(data.get("timeout_s"), DEFAULT_TIMEOUT_S),
        raw_query=raw_query if isinstance(raw_query, bool) else False,
    )


def _read_toml() -> dict[str, Any] | None:
    try:
        with open(config_path(), "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return None


def load_config() -> AppConfig:
    data = _read_toml()
    if data is None:
        return default_config()
    return from_toml(data)


def apply_profile(cfg: AppConfig, profile: str | None) -> AppConfig:
    if not profile:
        return cfg
    data = _read_toml()
    if data is None:
        return cfg

    profiles_raw = data.get("profiles") or {}
    if not isinstance(profiles_raw, dict):
        return cfg
    prof = profiles_raw.get(profile)
    if not isinstance(prof, dict):
        return cfg

    shop_address = normalize_shop_address(str(prof.get("shop_address") or ""), warn=True)
    raw_query = prof.get("raw_query")
    return AppConfig(
        shop_address=shop_address or cfg.shop_address,
        credentials=_credentials_from(prof.get("credentials"), cfg.credentials),
        timeout_s=_timeout_from(prof.get("timeout_s"), cfg.timeout_s),
        raw_query=raw_query if isinstance(raw_query, bool) else cfg.raw_query,
    )


def apply_env(cfg: AppConfig) -> AppConfig:
    shop_address = os.getenv(ENV_SHOP_ADDRESS, "").strip()
    creds = CredentialsConfig(
        api_key=os.getenv(ENV_API_KEY, "").strip() or cfg.credentials.api_key,
        api_secret=os.getenv(ENV_API_SECRET, "").strip() or cfg.credentials.api_secret,
        api_token=os.getenv(ENV_API_TOKEN, "").strip() or cfg.credentials.api_token,
    )
    return replace(
        cfg,
        shop_address=normalize_shop_address(shop_address, warn=True) if shop_address else cfg.shop_address,
        credentials=creds,
    )


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    ensure_parent_dir(path)
    data = _read_toml() or {}
    data.update(to_toml(cfg))
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(data).encode("utf-8"))
    os.chmod(path, 0o600)
    return path
