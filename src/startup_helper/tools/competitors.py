"""Competitor search.

Place keyword search supplies the named competitors with distances. When
the store registry is configured it supplies the true same-category total,
the sub-category mix and extra stores the place search missed.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..core import reference_data as ref
from ..core.estimator import filter_same_category, top_categories
from ..core.models import (
    CategoryCount,
    Competitor,
    CompetitorAnalysis,
    ConfidenceLevel,
    Coordinates,
    DataSource,
    ErrorCode,
    InsightTag,
    Place,
    StoreRecord,
    ToolResult,
)
from ..core.providers import Providers
from ..core.reference import is_franchise, normalize_business_type, place_search_term, search_keywords
from ..core.scoring import round_half_up
from . import tool_boundary

logger = logging.getLogger(__name__)


def _from_place(place: Place) -> Competitor:
    return Competitor(
        name=place.name,
        category=place.category,
        address=place.address,
        distance=place.distance,
        phone=place.phone,
        url=place.url,
        franchise=is_franchise(place.name),
        source=DataSource.KAKAO_LOCAL,
    )


def _from_store(store: StoreRecord) -> Competitor:
    name = f"{store.name} {store.branch}".strip()
    return Competitor(
        name=name,
        category=store.medium_category or store.large_category,
        address=store.address,
        franchise=is_franchise(name),
        source=DataSource.SEMAS,
    )


async def _try_geocode(providers: Providers, location: str) -> Optional[Coordinates]:
    try:
        place = await providers.geocoder.resolve(location)
    except Exception as e:
        logger.warning("Geocoding failed for %r, searching without a center: %s", location, e)
        return None
    return place.coordinates if place else None


async def _search_places(
    providers: Providers,
    location: str,
    business_type: str,
    business_key: str,
    center: Optional[Coordinates],
    radius: int,
    limit: int,
) -> list[Place]:
    """Nearby keyword search, widening to location-qualified queries when empty."""
    term = place_search_term(business_type, business_key)
    places: list[Place] = []
    if center is not None:
        places = await providers.places.by_keyword(term, center=center, radius=radius, size=limit, sort="distance")
    if not places:
        places = await providers.places.by_keyword(f"{location} {term}", size=limit)
    if not places and term != business_type.strip():
        places = await providers.places.by_keyword(f"{location} {business_type.strip()}", size=limit)
    return places


async def _registry_competitors(
    providers: Providers,
    business_key: str,
    business_type: str,
    center: Optional[Coordinates],
    radius: int,
) -> Optional[list[StoreRecord]]:
    if providers.registry is None or center is None:
        return None
    try:
        listing = await providers.registry.stores_in_radius(center, radius, rows=500)
    except Exception as e:
        logger.warning("Registry competitor lookup failed for %s: %s", business_key, e)
        return None
    if not listing.items:
        return None
    return filter_same_category(listing.items, search_keywords(business_key, business_type))


def market_gap(total_count: int, franchise_ratio: int) -> InsightTag:
    if total_count == 0:
        return InsightTag.NO_COMPETITION
    if total_count <= 3:
        return InsightTag.FEW_COMPETITORS
    if franchise_ratio >= 70:
        return InsightTag.FRANCHISE_DOMINANT
    if franchise_ratio <= 30:
        return InsightTag.INDEPENDENT_DOMINANT
    if total_count >= 10:
        return InsightTag.INTENSE_COMPETITION
    return InsightTag.BALANCED_COMPETITION


def competitor_insights(total_count: int, franchise_ratio: int, live: bool) -> list[InsightTag]:
    insights = []
    if live:
        insights.append(InsightTag.LIVE_REGISTRY_DATA)
    if franchise_ratio >= 70:
        insights.append(InsightTag.FRANCHISE_DOMINANT)
    elif franchise_ratio <= 30:
        insights.append(InsightTag.INDEPENDENT_DOMINANT)
    if total_count >= 20:
        insights.append(InsightTag.INTENSE_COMPETITION)
    elif total_count <= 5:
        insights.append(InsightTag.FIRST_MOVER_OPPORTUNITY)
    return insights


@tool_boundary(ErrorCode.COMPETITOR_SEARCH_FAILED, suggestion="위치명을 다시 확인하거나 잠시 후 시도해 주세요.")
async def find_competitors(
    location: str,
    business_type: str,
    providers: Providers,
    radius: int = 300,
    limit: int = 10,
) -> ToolResult:
    """Competitors near a location with franchise share and a market-gap read."""
    if limit < 1:
        raise ValueError("limit은 1 이상이어야 합니다.")
    business_key = normalize_business_type(business_type)
    center = await _try_geocode(providers, location)

    places = await _search_places(providers, location, business_type, business_key, center, radius, limit)
    competitors = [_from_place(p) for p in places]
    total_count = len(competitors)
    categories: list[CategoryCount] = []

    stores = await _registry_competitors(providers, business_key, business_type, center, radius)
    live = stores is not None
    if live:
        total_count = len(stores)
        categories = top_categories((s.display_category for s in stores), 5)
        known = {c.name.lower() for c in competitors}
        for store in stores:
            if len(competitors) >= limit:
                break
            if store.name.lower() not in known:
                competitors.append(_from_store(store))
                known.add(store.name.lower())

    franchise_count = sum(1 for c in competitors if c.franchise)
    franchise_ratio = round_half_up(franchise_count / len(competitors) * 100) if competitors else 0

    analysis = CompetitorAnalysis(
        business_type=business_key if business_key != ref.UNKNOWN_BUSINESS else business_type.strip(),
        location=location,
        radius=radius,
        competitors=competitors,
        total_count=total_count,
        franchise_ratio=franchise_ratio,
        market_gap=market_gap(total_count, franchise_ratio),
        top_categories=categories,
        insights=competitor_insights(total_count, franchise_ratio, live),
        confidence=ConfidenceLevel.HIGH if live else ConfidenceLevel.MEDIUM,
    )
    sources = [DataSource.KAKAO_LOCAL, DataSource.SEMAS] if live else [DataSource.KAKAO_LOCAL]
    return ToolResult.ok(analysis, sources)
