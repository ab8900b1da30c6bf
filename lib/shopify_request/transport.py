from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from .config_types import ClientConfig
from .errors import NetworkError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawResponse:
    status_code: int
    text: str


def _render_head(resp: httpx.Response) -> str:
    lines = [f"{resp.http_version} {resp.status_code} {resp.reason_phrase}".rstrip()]
    lines.extend(f"{key}: {value}" for key, value in resp.headers.multi_items())
    return "\r\n".join(lines)


def render_raw(resp: httpx.Response) -> str:
    """Render a response as header block(s), a blank line after each, then the body.

    Every hop of a followed redirect contributes its own header block.
    """
    heads = [_render_head(r) for r in (*resp.history, resp)]
    return "".join(f"{head}\r\n\r\n" for head in heads) + resp.text


class Transport:
    def __init__(self, cfg: ClientConfig, transport: httpx.BaseTransport | None = None):
        self._cfg = cfg
        self._transport = transport

    def execute(
            self,
            method: str,
            url: str,
            headers: dict[str, str],
            *,
            content: bytes | None = None,
    ) -> RawResponse:
        headers = {"User-Agent": self._cfg.user_agent, **headers}
        logger.debug("%s %s", method, url.split("?", 1)[0])
        # One client per call; the with-block releases sockets on every path.
        with httpx.Client(
                timeout=self._cfg.timeout_s,
                follow_redirects=True,
                transport=self._transport,
        ) as client:
            try:
                r = client.request(method, url, headers=headers, content=content)
            except httpx.RequestError as e:
                logger.debug("%s %s failed: %s", method, url.split("?", 1)[0], e)
                raise NetworkError(str(e)) from e
            raw = render_raw(r)

        logger.debug("%s %s -> %s", method, url.split("?", 1)[0], r.status_code)
        return RawResponse(status_code=r.status_code, text=raw)
