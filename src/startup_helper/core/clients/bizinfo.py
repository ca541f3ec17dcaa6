"""Bizinfo (기업마당) support program API client.

API docs: https://www.bizinfo.go.kr/web/lay1/program/S1T175C174/apiDetail.do
Auth: ``crtfcKey`` query parameter. Errors arrive as a ``reqErr`` field with
HTTP 200, so the payload is checked before use.
"""

from __future__ import annotations

import html
import logging
import re
from typing import Optional

import httpx

from ..cache import PREFIX_BIZINFO, TTL_VERY_LONG, TTLCache, generate_key
from ..errors import ProviderError
from ..models import GrantListing
from ..reference_data import GRANT_REGIONS, GRANT_STARTUP_KEYWORDS

logger = logging.getLogger(__name__)

API_URL = "https://www.bizinfo.go.kr/uss/rss/bizinfoApi.do"
SITE_BASE = "https://www.bizinfo.go.kr"

DEFAULT_FETCH_COUNT = 100


def strip_html(text: str) -> str:
    """Remove tags and entities, collapse whitespace."""
    text = re.sub(r"<[^>]*>", "", text or "")
    text = html.unescape(text).replace("\xa0", " ")
    return re.sub(r"\s+", " ", text).strip()


def format_date_range(date_range: str) -> str:
    """'20250101 ~ 20250131' -> '2025.01.01 ~ 2025.01.31'."""
    if not date_range or date_range.strip() == "추후 공지":
        return "추후 공지"
    parts = [p.strip() for p in date_range.split("~")]
    if len(parts) != 2:
        return date_range

    def _fmt(d: str) -> str:
        if len(d) != 8 or not d.isdigit():
            return d
        return f"{d[:4]}.{d[4:6]}.{d[6:]}"

    return f"{_fmt(parts[0])} ~ {_fmt(parts[1])}"


def _parse_item(item: dict) -> GrantListing:
    url = item.get("pblancUrl") or ""
    if url.startswith("/"):
        url = SITE_BASE + url
    tags = [t.strip() for t in (item.get("hashtags") or "").split(",") if t.strip()]
    return GrantListing(
        id=str(item.get("pblancId", "")),
        title=item.get("pblancNm") or "",
        agency=item.get("jrsdInsttNm") or item.get("excInsttNm") or "",
        summary_html=item.get("bsnsSumryCn") or "",
        application_window=item.get("reqstBeginEndDe") or "",
        url=url,
        tags=tags,
        target_audience=item.get("trgetNm") or "",
    )


def _text(grant: GrantListing, *fields: str) -> str:
    values = []
    for field in fields:
        value = getattr(grant, field)
        values.append(" ".join(value) if isinstance(value, list) else value)
    return " ".join(values)


def filter_startup(grants: list[GrantListing]) -> list[GrantListing]:
    return [
        g for g in grants
        if any(k in _text(g, "title", "summary_html", "tags", "target_audience") for k in GRANT_STARTUP_KEYWORDS)
    ]


def filter_region(grants: list[GrantListing], region: Optional[str]) -> list[GrantListing]:
    """Drop programs limited to some other region.

    Nationwide programs stay. When the filter would leave nothing, the
    input is returned unchanged.
    """
    if not region:
        return grants
    mine = next((r for r in GRANT_REGIONS if r in region), None)
    if mine is None:
        return grants
    others = [r for r in GRANT_REGIONS if r != mine]

    kept = []
    for g in grants:
        is_mine = mine in _text(g, "title", "summary_html", "tags", "agency")
        other_only = any(r in g.title or r in g.agency for r in others)
        if is_mine or not other_only:
            kept.append(g)
    return kept or grants


def filter_founder_type(grants: list[GrantListing], founder_type: Optional[str]) -> list[GrantListing]:
    """Exclude programs reserved for another founder group; never empties the list."""
    if founder_type == "청년":
        kept = [g for g in grants if not any(k in g.title for k in ("중장년", "시니어", "50+"))]
        return kept or grants
    if founder_type == "중장년":
        kept = [g for g in grants if "청년전용" not in g.title and "청년 전용" not in g.title]
        return kept or grants
    if founder_type == "여성":
        return sorted(grants, key=lambda g: "여성" not in _text(g, "title", "tags"))
    return grants


class BizinfoClient:
    """Open government support programs, filtered for startups."""

    def __init__(
        self,
        api_key: str,
        timeout: float = 10.0,
        cache: Optional[TTLCache] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self.cache = cache if cache is not None else TTLCache()
        self._transport = transport

    async def search(self, count: int = DEFAULT_FETCH_COUNT, hashtags: Optional[str] = None) -> list[GrantListing]:
        """Raw program listing.

        Raises:
            ProviderError: missing key or an error reported in the payload.
        """
        if not self.api_key:
            raise ProviderError("bizinfo", "BIZINFO_API_KEY is not configured")
        params: dict = {"crtfcKey": self.api_key, "dataType": "json", "searchCnt": count}
        if hashtags:
            params["hashtags"] = hashtags

        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=5.0),
            headers={"Accept": "application/json"},
            transport=self._transport,
        ) as client:
            response = await client.get(API_URL, params=params)
            response.raise_for_status()
            data = response.json()

        if data.get("reqErr"):
            raise ProviderError("bizinfo", str(data["reqErr"]))
        return [_parse_item(item) for item in data.get("jsonArray") or []]

    async def startup_grants(
        self,
        region: Optional[str] = None,
        founder_type: Optional[str] = None,
        limit: int = 10,
    ) -> list[GrantListing]:
        key = generate_key(PREFIX_BIZINFO, {"count": DEFAULT_FETCH_COUNT})
        grants = await self.cache.get_or_set(key, lambda: self.search(DEFAULT_FETCH_COUNT), ttl=TTL_VERY_LONG)
        grants = filter_startup(grants)
        grants = filter_region(grants, region)
        grants = filter_founder_type(grants, founder_type)
        return grants[:limit]
