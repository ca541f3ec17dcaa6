"""Kakao Local API client.

API docs: https://developers.kakao.com/docs/latest/ko/local/dev-guide
Auth: REST API key in the ``Authorization: KakaoAK {key}`` header.
Keyword and category search return at most 15 documents per page.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

import httpx

from ..cache import PREFIX_COORDS, PREFIX_KAKAO, TTL_LONG, TTL_MEDIUM, TTLCache, generate_key
from ..errors import ProviderError
from ..models import Coordinates, Place

logger = logging.getLogger(__name__)

API_BASE = "https://dapi.kakao.com/v2/local"

MAX_PAGE_SIZE = 15
MAX_RADIUS = 20000
MIN_QUERY_LENGTH = 2
MAX_QUERY_LENGTH = 100


def normalize_query(query: str) -> str:
    """Trim and collapse whitespace; reject queries the API cannot answer."""
    normalized = re.sub(r"\s+", " ", (query or "").strip())
    if not normalized:
        raise ValueError("검색어가 비어 있습니다.")
    if len(normalized) < MIN_QUERY_LENGTH:
        raise ValueError(f"검색어는 {MIN_QUERY_LENGTH}자 이상이어야 합니다: {normalized!r}")
    if len(normalized) > MAX_QUERY_LENGTH:
        raise ValueError(f"검색어는 {MAX_QUERY_LENGTH}자 이하여야 합니다.")
    return normalized


def _parse_coordinates(doc: dict) -> Optional[Coordinates]:
    try:
        return Coordinates(lat=float(doc["y"]), lng=float(doc["x"]))
    except (KeyError, TypeError, ValueError):
        return None


def _parse_place(doc: dict) -> Place:
    distance = doc.get("distance")
    return Place(
        id=str(doc.get("id", "")),
        name=doc.get("place_name") or doc.get("address_name", ""),
        category=doc.get("category_name", ""),
        address=doc.get("road_address_name") or doc.get("address_name", ""),
        coordinates=_parse_coordinates(doc),
        distance=int(distance) if distance not in (None, "") else None,
        phone=doc.get("phone") or None,
        url=doc.get("place_url") or None,
    )


class KakaoLocalClient:
    """Geocoding, keyword search and category search over Kakao Local."""

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

    def _client(self) -> httpx.AsyncClient:
        if not self.api_key:
            raise ProviderError("kakao", "KAKAO_API_KEY is not configured")
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=5.0),
            headers={"Authorization": f"KakaoAK {self.api_key}"},
            transport=self._transport,
        )

    async def _get(self, path: str, params: dict) -> dict:
        async with self._client() as client:
            response = await client.get(f"{API_BASE}/{path}", params=params)
            response.raise_for_status()
            return response.json()

    async def resolve(self, query: str) -> Optional[Place]:
        """Resolve an address or place name to a point.

        Tries address search first, then keyword search. Returns None when
        neither finds anything.
        """
        query = normalize_query(query)
        key = generate_key(PREFIX_COORDS, {"q": query})
        return await self.cache.get_or_set(key, lambda: self._resolve(query), ttl=TTL_LONG)

    async def _resolve(self, query: str) -> Optional[Place]:
        try:
            data = await self._get("search/address.json", {"query": query})
            docs = data.get("documents", [])
            if docs:
                place = _parse_place(docs[0])
                if place.coordinates is not None:
                    return place.model_copy(update={"name": query})
        except httpx.HTTPError as e:
            logger.warning("Address search failed for %r, trying keyword search: %s", query, e)

        data = await self._get("search/keyword.json", {"query": query, "size": 1})
        docs = data.get("documents", [])
        if not docs:
            logger.info("No geocoding result for %r", query)
            return None
        place = _parse_place(docs[0])
        return place if place.coordinates is not None else None

    async def by_keyword(
        self,
        query: str,
        center: Optional[Coordinates] = None,
        radius: Optional[int] = None,
        size: int = MAX_PAGE_SIZE,
        sort: str = "accuracy",
    ) -> list[Place]:
        params: dict = {
            "query": normalize_query(query),
            "size": max(1, min(size, MAX_PAGE_SIZE)),
            "sort": sort,
        }
        if center is not None:
            params["x"] = center.lng
            params["y"] = center.lat
            if radius:
                params["radius"] = min(radius, MAX_RADIUS)
        data = await self._get("search/keyword.json", params)
        return [_parse_place(doc) for doc in data.get("documents", [])]

    async def by_category(
        self,
        code: str,
        center: Coordinates,
        radius: int = 500,
        size: int = MAX_PAGE_SIZE,
        sort: str = "distance",
    ) -> list[Place]:
        data = await self._category_page(code, center, radius, size, sort)
        return [_parse_place(doc) for doc in data.get("documents", [])]

    async def category_total_count(self, code: str, center: Coordinates, radius: int) -> int:
        """Total places of a category in the radius, not just the first page."""
        key = generate_key(PREFIX_KAKAO, {"code": code, "lat": round(center.lat, 3), "lng": round(center.lng, 3), "r": radius})
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        data = await self._category_page(code, center, radius, 1, "distance")
        meta = data.get("meta", {})
        count = int(meta.get("total_count", len(data.get("documents", []))))
        self.cache.set(key, count, ttl=TTL_MEDIUM)
        return count

    async def _category_page(self, code: str, center: Coordinates, radius: int, size: int, sort: str) -> dict:
        params = {
            "category_group_code": code,
            "x": center.lng,
            "y": center.lat,
            "radius": min(radius, MAX_RADIUS),
            "size": max(1, min(size, MAX_PAGE_SIZE)),
            "sort": sort,
        }
        return await self._get("search/category.json", params)
