"""SEMAS (소상공인시장진흥공단) commercial district store API client.

API docs: https://www.data.go.kr/data/15012005/openapi.do
Auth: data.go.kr service key as the ``ServiceKey`` query parameter.
Every response carries ``header.resultCode``; anything but "00" is an error
even when the HTTP status is 200.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from ..cache import PREFIX_SEMAS, TTL_MEDIUM, TTLCache, generate_key
from ..errors import ProviderError
from ..models import Coordinates, StoreListing, StoreRecord

logger = logging.getLogger(__name__)

API_BASE = "https://apis.data.go.kr/B553077/api/open/sdsc2"

SUCCESS_CODE = "00"

# Industry code length picks the classification level it filters on
INDUSTRY_CODE_PARAMS = {2: "indsLclsCd", 4: "indsMclsCd", 6: "indsSclsCd"}


def _parse_store(item: dict) -> StoreRecord:
    coordinates = None
    try:
        coordinates = Coordinates(lat=float(item["lat"]), lng=float(item["lon"]))
    except (KeyError, TypeError, ValueError):
        pass
    return StoreRecord(
        store_id=str(item.get("bizesId", "")),
        name=item.get("bizesNm") or "",
        branch=item.get("brchNm") or "",
        large_category=item.get("indsLclsNm") or "",
        large_code=item.get("indsLclsCd") or "",
        medium_category=item.get("indsMclsNm") or "",
        medium_code=item.get("indsMclsCd") or "",
        small_category=item.get("indsSclsNm") or "",
        road_address=item.get("rdnmAdr") or "",
        lot_address=item.get("lnoAdr") or "",
        coordinates=coordinates,
    )


def parse_listing(data: dict) -> StoreListing:
    """Validate the result header and extract stores.

    Raises:
        ProviderError: the API answered with a non-success result code.
    """
    header = data.get("header", {})
    code = str(header.get("resultCode", ""))
    if code != SUCCESS_CODE:
        raise ProviderError("semas", f"result code {code or 'missing'}: {header.get('resultMsg', '')}")

    body = data.get("body") or {}
    items = body.get("items") or []
    if isinstance(items, dict):
        items = items.get("item") or []
    if isinstance(items, dict):
        items = [items]
    stores = [_parse_store(item) for item in items]
    return StoreListing(items=stores, total_count=int(body.get("totalCount") or len(stores)))


class SemasStoreClient:
    """Store listings by radius or administrative district."""

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

    async def _fetch(self, operation: str, params: dict) -> StoreListing:
        if not self.api_key:
            raise ProviderError("semas", "SEMAS_API_KEY is not configured")
        params = {"ServiceKey": self.api_key, "pageNo": 1, "type": "json", **params}
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=5.0),
            transport=self._transport,
        ) as client:
            response = await client.get(f"{API_BASE}/{operation}", params=params)
            response.raise_for_status()
            data = response.json()
        return parse_listing(data)

    async def stores_in_radius(
        self,
        center: Coordinates,
        radius: int,
        rows: int = 1000,
        industry_code: Optional[str] = None,
    ) -> StoreListing:
        params: dict = {"radius": radius, "cx": center.lng, "cy": center.lat, "numOfRows": rows}
        _add_industry_filter(params, industry_code)
        key = generate_key(
            PREFIX_SEMAS,
            {"op": "radius", "lat": round(center.lat, 3), "lng": round(center.lng, 3), "r": radius, "rows": rows, "ind": industry_code},
        )
        return await self.cache.get_or_set(key, lambda: self._fetch("storeListInRadius", params), ttl=TTL_MEDIUM)

    async def stores_in_district(
        self,
        district_code: str,
        rows: int = 1000,
        industry_code: Optional[str] = None,
    ) -> StoreListing:
        params: dict = {"divId": "adongCd", "key": district_code, "numOfRows": rows}
        _add_industry_filter(params, industry_code)
        key = generate_key(PREFIX_SEMAS, {"op": "dong", "key": district_code, "rows": rows, "ind": industry_code})
        return await self.cache.get_or_set(key, lambda: self._fetch("storeListInDong", params), ttl=TTL_MEDIUM)


def _add_industry_filter(params: dict, industry_code: Optional[str]) -> None:
    if not industry_code:
        return
    param = INDUSTRY_CODE_PARAMS.get(len(industry_code))
    if param is None:
        raise ValueError(f"Industry code must be 2, 4 or 6 characters: {industry_code!r}")
    params[param] = industry_code
