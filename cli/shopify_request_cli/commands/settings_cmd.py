from __future__ import annotations

import typer

from .. import console
from ..config import config_path, load_config, normalize_shop_address, save_config

app = typer.Typer(help="Manage local settings (~/.config/shopify-request/config.toml).")


def _secret_state(value: str) -> str:
    return "(set)" if (value or "").strip() else "(empty)"


@app.command("show")
def show_settings():
    cfg = load_config()
    creds = cfg.credentials
    console.console.print(
        f"shop_address={cfg.shop_address} api_key={_secret_state(creds.api_key)} "
        f"api_secret={_secret_state(creds.api_secret)} api_token={_secret_state(creds.api_token)} "
        f"timeout_s={cfg.timeout_s} raw_query={cfg.raw_query}",
        markup=False,
    )


@app.command("path")
def show_path():
    console.console.print(config_path(), markup=False)


@app.command("set")
def set_setting(
        shop: str | None = typer.Option(None, "--shop", help="Set shop address."),
        api_key: str | None = typer.Option(None, "--api-key", help="Set API key."),
        api_secret: str | None = typer.Option(None, "--api-secret", help="Set API secret."),
        api_token: str | None = typer.Option(None, "--api-token", help="Set access token."),
        timeout_s: float | None = typer.Option(None, "--timeout", help="Request timeout in seconds."),
        raw_query: bool | None = typer.Option(None, "--raw-query/--encode-query", help="Send query strings unencoded."),
):
    cfg = load_config()
    if shop is not None:
        cfg.shop_address = normalize_shop_address(shop, warn=True)
    if api_key is not None:
        cfg.credentials.api_key = api_key.strip()
    if api_secret is not None:
        cfg.credentials.api_secret = api_secret.strip()
    if api_token is not None:
        cfg.credentials.api_token = api_token.strip()
    if timeout_s is not None:
        if timeout_s <= 0:
            console.err("Timeout must be positive.")
            raise typer.Exit(code=2)
        cfg.timeout_s = timeout_s
    if raw_query is not None:
        cfg.raw_query = raw_query
    saved = save_config(cfg)
    console.ok(f"Settings updated: {saved}")
