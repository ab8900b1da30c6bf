from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from .errors import ApiError, AuthError, DecodeError
from .pagination import page_info_from_link

HEADER_SEPARATOR = "\r\n\r\n"
LINE_SEPARATOR = "\r\n"


@dataclass(frozen=True)
class ParsedResponse:
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None
    text: str = ""
    status_code: int | None = None

    @property
    def next_page_info(self) -> str | None:
        return page_info_from_link(self.headers.get("link"), "next")

    @property
    def previous_page_info(self) -> str | None:
        return page_info_from_link(self.headers.get("link"), "previous")

    def require_body(self) -> Any:
        if self.body is None and self.text.strip():
            raise DecodeError(f"response body is not valid JSON: {self.text[:200]!r}")
        return self.body

    def raise_for_status(self) -> None:
        if self.status_code is None or self.status_code < 400:
            return
        msg = f"request failed with {self.status_code}"
        details = None
        if isinstance(self.body, dict) and "errors" in self.body:
            details = json.dumps(self.body, ensure_ascii=False)
            errors = self.body.get("errors")
            if isinstance(errors, str) and errors:
                msg = errors
        elif self.text:
            details = self.text[:1000]

        if self.status_code in (401, 403):
            raise AuthError(self.status_code, msg, details)
        raise ApiError(self.status_code, msg, details)


def parse_response(raw: str, status_code: int | None = None) -> ParsedResponse:
    """Split raw ``headers + blank line + body`` text into a :class:`ParsedResponse`.

    When a redirect chain produced several header blocks only the last header
    block and the body are kept.
    """
    headers: dict[str, str] = {}
    parts = raw.split(HEADER_SEPARATOR)
    if len(parts) > 1:
        header_block, body_text = parts[-2], parts[-1]
        for line in header_block.split(LINE_SEPARATOR):
            key, sep, value = line.partition(": ")
            if sep:
                headers[key.lower()] = value
    else:
        body_text = parts[0]

    return ParsedResponse(
        headers=headers,
        body=_decode_json(body_text),
        text=body_text,
        status_code=status_code,
    )


def _decode_json(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        return None


def _scalar_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query(params: Mapping[str, Any], *, encode: bool = True) -> str:
    """Join ``key=value`` pairs with ``&``.

    With ``encode=False`` nothing is escaped, so values containing ``&``,
    ``=`` or spaces corrupt the query string.
    """
    pairs = []
    for key, value in params.items():
        text = _scalar_text(value)
        if encode:
            pairs.append(f"{quote(str(key), safe='')}={quote(text, safe='')}")
        else:
            pairs.append(f"{key}={text}")
    return "&".join(pairs)


def encode_json_body(params: Mapping[str, Any]) -> bytes:
    return json.dumps(dict(params), ensure_ascii=False, separators=(",", ":")).encode("utf-8")
