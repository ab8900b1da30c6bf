from __future__ import annotations

import json

import typer
from shopify_request import ApiError, NetworkError, ShopifyRequestError, UnsupportedMethodError

from .. import console
from ..config import load_config
from ..http import make_client


def _parse_params(pairs: list[str], data: str | None) -> dict:
    params: dict = {}
    if data:
        try:
            loaded = json.loads(data)
        except ValueError as e:
            console.err(f"--data is not valid JSON: {e}")
            raise typer.Exit(code=2)
        if not isinstance(loaded, dict):
            console.err("--data must be a JSON object.")
            raise typer.Exit(code=2)
        params.update(loaded)
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            console.err(f"Invalid parameter {pair!r}, expected key=value.")
            raise typer.Exit(code=2)
        params[key.strip()] = value
    return params


def request(
        method: str = typer.Argument(..., help="GET, POST, PUT or DELETE."),
        endpoint: str = typer.Argument(..., help="Endpoint path, e.g. /admin/api/2019-10/products.json"),
        param: list[str] = typer.Option([], "-p", "--param", help="Request parameter as key=value (repeatable)."),
        data: str | None = typer.Option(None, "--data", help="JSON object merged into the parameters."),
        page_info: str = typer.Option("", "--page-info", help="Cursor of the page to fetch."),
        limit: int = typer.Option(50, "--limit", help="Results per page (50..250)."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        shop: str | None = typer.Option(None, "--shop", help="Override shop address."),
        show_headers: bool = typer.Option(False, "--headers", help="Print response headers."),
        raise_status: bool = typer.Option(False, "--raise-status", help="Fail on HTTP status >= 400."),
):
    """Send one request to the shop and print the response."""
    params = _parse_params(param, data)
    cfg = load_config()
    client = make_client(cfg, profile=profile, shop_override=shop)
    if not client.config.shop_address:
        console.err("Shop address is not configured. Run `shopify-request settings set --shop ...` or pass --shop.")
        raise typer.Exit(code=2)

    try:
        resp = client.make_request(endpoint, method, params, page_info=page_info, limit=limit)
        if raise_status:
            resp.raise_for_status()
    except UnsupportedMethodError as e:
        console.err(str(e))
        raise typer.Exit(code=2)
    except ApiError as e:
        if e.status_code in (401, 403):
            console.err("Unauthorized. Check the API credentials.")
        else:
            console.err(f"Request failed: {e}")
        raise typer.Exit(code=1)
    except NetworkError as e:
        console.err(f"Network error: {e}")
        raise typer.Exit(code=1)
    except ShopifyRequestError as e:
        console.err(f"Request failed: {e}")
        raise typer.Exit(code=1)

    if show_headers:
        console.print_headers(resp.headers)
    if resp.body is not None:
        console.print_json(resp.body)
    elif resp.text:
        console.print(resp.text, markup=False)
    next_cursor = resp.next_page_info
    if next_cursor:
        console.info(f"next page_info: {next_cursor}")
