from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qs, urlsplit

MIN_LIMIT = 50
MAX_LIMIT = 250

_LINK_PART_RE = re.compile(r'<([^>]*)>\s*;\s*rel="?([^";]+)"?')


def clamp_limit(limit: int) -> int:
    if limit <= 0:
        return MIN_LIMIT
    if limit > MAX_LIMIT:
        return MAX_LIMIT
    return limit


def paginate_params(params: Mapping[str, Any], page_info: str) -> dict[str, Any]:
    """Return the parameters allowed on a cursor request.

    A request carrying ``page_info`` may only also carry ``fields`` and
    ``limit``; everything else is dropped. ``limit`` is injected by the caller.
    """
    out: dict[str, Any] = {"page_info": page_info}
    fields = params.get("fields")
    if fields not in (None, ""):
        out["fields"] = fields
    return out


def page_info_from_link(link: str | None, rel: str = "next") -> str | None:
    if not link:
        return None
    for url, link_rel in _LINK_PART_RE.findall(link):
        if link_rel.strip() != rel:
            continue
        values = parse_qs(urlsplit(url).query).get("page_info")
        if values:
            return values[0]
    return None
