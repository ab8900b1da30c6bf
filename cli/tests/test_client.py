from __future__ import annotations

import base64
import json

import httpx
import pytest

from shopify_request import ClientConfig, NetworkError, ShopifyRequest, UnsupportedMethodError

SHOP = "https://example.myshopify.com"
ENDPOINT = "/admin/api/2019-10/products.json"


def _client(captured: list, credentials=None, *, raw_query: bool = False, response=None) -> ShopifyRequest:
    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        if response is not None:
            return response
        return httpx.Response(200, json={"products": []}, headers={"X-Request-Id": "abc"})

    return ShopifyRequest.from_credentials(
        SHOP,
        credentials if credentials is not None else {"api_token": "shpat_test"},
        raw_query=raw_query,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.parametrize(
    ("limit", "expected"),
    [(0, 50), (-5, 50), (1, 1), (50, 50), (120, 120), (250, 250), (251, 250), (10_000, 250)],
)
def test_limit_is_clamped(limit: int, expected: int) -> None:
    captured: list[httpx.Request] = []
    _client(captured).make_request(ENDPOINT, "GET", {}, limit=limit)
    assert captured[0].url.params["limit"] == str(expected)


def test_get_sends_query_and_no_body() -> None:
    captured: list[httpx.Request] = []
    resp = _client(captured).make_request(ENDPOINT, "get", {"status": "active", "vendor": "Acme"})

    request = captured[0]
    assert request.method == "GET"
    assert str(request.url).startswith(SHOP + ENDPOINT + "?")
    assert dict(request.url.params) == {"status": "active", "vendor": "Acme", "limit": "50"}
    assert request.content == b""
    assert "content-type" not in request.headers
    assert resp.body == {"products": []}
    assert resp.headers["x-request-id"] == "abc"
    assert resp.status_code == 200


def test_delete_uses_query_string() -> None:
    captured: list[httpx.Request] = []
    _client(captured).make_request("/admin/api/2019-10/products/1.json", "DELETE")

    request = captured[0]
    assert request.method == "DELETE"
    assert request.url.query == b"limit=50"
    assert request.content == b""


@pytest.mark.parametrize("method", ["POST", "put"])
def test_body_methods_send_json(method: str) -> None:
    captured: list[httpx.Request] = []
    params = {"title": "Café tee", "published": True}
    _client(captured).make_request(ENDPOINT, method, params, limit=300)

    request = captured[0]
    expected = json.dumps({"title": "Café tee", "published": True, "limit": 250},
                          ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    assert request.method == method.upper()
    assert request.url.query == b""
    assert request.content == expected
    assert json.loads(request.content) == {"title": "Café tee", "published": True, "limit": 250}
    assert request.headers["content-type"] == "application/json"
    assert request.headers["content-length"] == str(len(expected))


def test_page_info_keeps_only_fields_and_limit() -> None:
    captured: list[httpx.Request] = []
    params = {"fields": "id,title", "status": "active", "vendor": "Acme"}
    _client(captured).make_request(ENDPOINT, "GET", params, page_info="eyJsYXN0X2lkIjo0fQ", limit=100)

    assert dict(captured[0].url.params) == {
        "page_info": "eyJsYXN0X2lkIjo0fQ",
        "fields": "id,title",
        "limit": "100",
    }
    assert params == {"fields": "id,title", "status": "active", "vendor": "Acme"}


def test_page_info_without_fields() -> None:
    captured: list[httpx.Request] = []
    _client(captured).make_request(ENDPOINT, "GET", {"status": "active"}, page_info="cursor")

    assert dict(captured[0].url.params) == {"page_info": "cursor", "limit": "50"}


def test_basic_auth_when_token_empty() -> None:
    captured: list[httpx.Request] = []
    _client(captured, {"api_key": "key", "api_secret": "secret"}).make_request(ENDPOINT, "GET")

    headers = captured[0].headers
    assert headers["authorization"] == "Basic " + base64.b64encode(b"key:secret").decode("ascii")
    assert "x-shopify-access-token" not in headers


def test_basic_auth_with_missing_credentials() -> None:
    captured: list[httpx.Request] = []
    _client(captured, {}).make_request(ENDPOINT, "GET")

    assert captured[0].headers["authorization"] == "Basic " + base64.b64encode(b":").decode("ascii")


def test_token_takes_precedence_over_basic_auth() -> None:
    captured: list[httpx.Request] = []
    creds = {"api_key": "key", "api_secret": "secret", "api_token": "shpat_123"}
    _client(captured, creds).make_request(ENDPOINT, "GET")

    headers = captured[0].headers
    assert headers["x-shopify-access-token"] == "shpat_123"
    assert "authorization" not in headers


def test_string_credentials_are_a_token() -> None:
    captured: list[httpx.Request] = []
    _client(captured, "shpat_abc").make_request(ENDPOINT, "GET")

    assert captured[0].headers["x-shopify-access-token"] == "shpat_abc"


def test_unsupported_method_makes_no_call() -> None:
    captured: list[httpx.Request] = []
    client = _client(captured)

    with pytest.raises(UnsupportedMethodError) as exc:
        client.make_request(ENDPOINT, "patch", {"a": 1})

    assert exc.value.method == "PATCH"
    assert captured == []


def test_query_values_are_encoded_by_default() -> None:
    captured: list[httpx.Request] = []
    _client(captured).make_request(ENDPOINT, "GET", {"title": "a&b=c d"})

    assert captured[0].url.params["title"] == "a&b=c d"


def test_raw_query_keeps_values_unescaped() -> None:
    captured: list[httpx.Request] = []
    _client(captured, raw_query=True).make_request(ENDPOINT, "GET", {"title": "a&b"})

    # the unescaped & splits the value into a separate (empty) key
    assert captured[0].url.params["title"] == "a"
    assert "b" in captured[0].url.params


def test_transport_error_raises_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = ShopifyRequest.from_credentials(SHOP, {"api_token": "t"}, transport=httpx.MockTransport(handler))

    with pytest.raises(NetworkError) as exc:
        client.make_request(ENDPOINT, "GET")

    assert isinstance(exc.value.__cause__, httpx.ConnectError)


def test_http_error_status_is_returned_not_raised() -> None:
    captured: list[httpx.Request] = []
    response = httpx.Response(404, json={"errors": "Not Found"})
    resp = _client(captured, response=response).make_request(ENDPOINT, "GET")

    assert resp.status_code == 404
    assert resp.body == {"errors": "Not Found"}


def test_plain_text_body_decodes_to_none() -> None:
    captured: list[httpx.Request] = []
    response = httpx.Response(502, text="Bad Gateway")
    resp = _client(captured, response=response).make_request(ENDPOINT, "GET")

    assert resp.body is None
    assert resp.text == "Bad Gateway"


def test_convenience_wrappers_forward_method() -> None:
    captured: list[httpx.Request] = []
    client = _client(captured)

    client.get(ENDPOINT, {"fields": "id"}, page_info="c1")
    client.post(ENDPOINT, {"product": {"title": "x"}})
    client.put(ENDPOINT, {"product": {"id": 1}})
    client.delete(ENDPOINT)

    assert [r.method for r in captured] == ["GET", "POST", "PUT", "DELETE"]
    assert dict(captured[0].url.params) == {"page_info": "c1", "fields": "id", "limit": "50"}
    assert json.loads(captured[1].content) == {"product": {"title": "x"}, "limit": 50}


def test_client_takes_config_directly() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={})

    cfg = ClientConfig(shop_address=SHOP, api_key="k", api_secret="s", user_agent="shop-sync/2")
    client = ShopifyRequest(cfg, transport=httpx.MockTransport(handler))
    client.make_request(ENDPOINT, "GET")

    assert client.config is cfg
    assert captured[0].headers["user-agent"] == "shop-sync/2"
    assert captured[0].headers["authorization"] == "Basic " + base64.b64encode(b"k:s").decode("ascii")
