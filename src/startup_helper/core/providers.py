"""Collaborator interfaces and the bundle handed to every tool.

The tools only see these Protocols. The Kakao, SEMAS and Bizinfo clients
implement them; tests pass ``AsyncMock`` stand-ins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from .models import Coordinates, GrantListing, Place, StoreListing


class Geocoder(Protocol):
    async def resolve(self, query: str) -> Optional[Place]:
        """Resolve an address or place name to a point, or None."""
        ...


class PlaceSearch(Protocol):
    async def by_keyword(
        self,
        query: str,
        center: Optional[Coordinates] = None,
        radius: Optional[int] = None,
        size: int = 15,
        sort: str = "accuracy",
    ) -> list[Place]:
        ...

    async def by_category(
        self,
        code: str,
        center: Coordinates,
        radius: int = 500,
        size: int = 15,
        sort: str = "distance",
    ) -> list[Place]:
        ...

    async def category_total_count(self, code: str, center: Coordinates, radius: int) -> int:
        ...


class RegionalStoreRegistry(Protocol):
    async def stores_in_radius(
        self,
        center: Coordinates,
        radius: int,
        rows: int = 1000,
        industry_code: Optional[str] = None,
    ) -> StoreListing:
        ...

    async def stores_in_district(
        self,
        district_code: str,
        rows: int = 1000,
        industry_code: Optional[str] = None,
    ) -> StoreListing:
        ...


class GrantListingProvider(Protocol):
    async def startup_grants(
        self,
        region: Optional[str] = None,
        founder_type: Optional[str] = None,
        limit: int = 10,
    ) -> list[GrantListing]:
        ...


@dataclass
class Providers:
    """Everything a tool may call out to.

    ``registry`` and ``grants`` are None when their API key is not
    configured; tools check for that and skip the enrichment.
    """

    geocoder: Geocoder
    places: PlaceSearch
    registry: Optional[RegionalStoreRegistry] = None
    grants: Optional[GrantListingProvider] = None
