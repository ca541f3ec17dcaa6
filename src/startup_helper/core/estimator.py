"""Confidence-weighted estimation.

Blends curated static profiles with live store counts from the regional
registry, and labels every estimate with how much of it rests on live data.
A failed or missing live source never raises here; it lowers confidence.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable, Optional

from . import reference_data as ref
from .errors import ToolError, location_not_found
from .models import (
    CategoryCount,
    CompetitionEstimate,
    CompetitionLevel,
    CompetitorCountEstimate,
    ConfidenceLevel,
    Coordinates,
    DataSource,
    ErrorCode,
    LiveObservation,
    PopulationCounts,
    PopulationEstimate,
    Place,
    StoreRecord,
)
from .providers import Providers, RegionalStoreRegistry
from .reference import (
    get_area_pattern,
    get_area_profile,
    infer_area_type,
    normalize_location,
    place_search_term,
    search_keywords,
)
from .scoring import round_half_up

logger = logging.getLogger(__name__)


def resolve_confidence(curated: bool, live_ok: bool) -> ConfidenceLevel:
    if curated and live_ok:
        return ConfidenceLevel.HIGH
    if curated or live_ok:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


def blend(static: float, live: float, curated: bool) -> int:
    """Weighted blend for curated values; the live value alone otherwise."""
    if curated:
        return round_half_up(ref.STATIC_WEIGHT * static + ref.LIVE_WEIGHT * live)
    return round_half_up(live)


def top_categories(names: Iterable[str], limit: int) -> list[CategoryCount]:
    counts = Counter(name for name in names if name)
    return [CategoryCount(name=name, count=count) for name, count in counts.most_common(limit)]


def filter_same_category(
    stores: Iterable[StoreRecord],
    keywords: Iterable[str],
    include_name: bool = True,
) -> list[StoreRecord]:
    """Stores whose name or industry labels contain any of the keywords."""
    keywords = [k.lower() for k in keywords if k]
    matched = []
    for store in stores:
        parts = [store.medium_category, store.large_category]
        if include_name:
            parts.insert(0, store.name)
        text = " ".join(parts).lower()
        if any(k in text for k in keywords):
            matched.append(store)
    return matched


async def observe_stores(
    registry: Optional[RegionalStoreRegistry],
    center: Coordinates,
    radius: int,
    rows: int = 1000,
) -> Optional[LiveObservation]:
    """One registry call around ``center``; None when unavailable or empty."""
    if registry is None:
        return None
    try:
        listing = await registry.stores_in_radius(center, radius, rows=rows)
    except Exception as e:
        logger.warning("Store registry lookup failed at %s,%s: %s", center.lat, center.lng, e)
        return None
    if not listing.items:
        return None
    return LiveObservation(
        store_count=listing.total_count or len(listing.items),
        top_categories=top_categories((s.large_category for s in listing.items), 5),
    )


async def geocode(providers: Providers, location: str) -> Place:
    """Resolve a location that the caller cannot do without.

    Raises:
        ToolError: LOCATION_NOT_FOUND when nothing matches, API_UNAVAILABLE
            when the geocoder itself failed.
    """
    try:
        place = await providers.geocoder.resolve(location)
    except ValueError:
        raise
    except Exception as e:
        logger.warning("Geocoding failed for %r: %s", location, e)
        raise ToolError(
            ErrorCode.API_UNAVAILABLE,
            f"위치 검색 서비스에 연결할 수 없습니다: {location}",
            suggestion="잠시 후 다시 시도해 주세요.",
        ) from e
    if place is None or place.coordinates is None:
        raise location_not_found(location)
    return place


def _blend_population(
    counts: PopulationCounts,
    live: LiveObservation,
    ratio: int,
    curated: bool,
) -> PopulationCounts:
    estimated = live.store_count * ratio
    if curated:
        return PopulationCounts(
            total=blend(counts.total, estimated, curated=True),
            residential=counts.residential,
            working=counts.working,
            floating=blend(counts.floating, ref.LIVE_FLOATING_SHARE * estimated, curated=True),
        )
    split = ref.LIVE_SEGMENT_SPLIT
    return PopulationCounts(
        total=round_half_up(estimated),
        residential=round_half_up(estimated * split["residential"]),
        working=round_half_up(estimated * split["working"]),
        floating=round_half_up(estimated * split["floating"]),
    )


async def estimate_population(location: str, providers: Providers, radius: int = 500) -> PopulationEstimate:
    """Population profile for a location.

    A curated area supplies the baseline and its own coordinates; anything
    else is geocoded and gets the default pattern for its inferred area type.
    Distributions pass through untouched; only the counts are blended.

    Raises:
        ToolError: LOCATION_NOT_FOUND when an uncurated location cannot be geocoded.
    """
    key = normalize_location(location)
    profile = get_area_profile(key)
    curated = profile is not None
    address = ""

    if profile is None:
        place = await geocode(providers, location)
        pattern = get_area_pattern(infer_area_type(location))
        profile = pattern.model_copy(update={"name": location, "coordinates": place.coordinates})
        address = place.address
    else:
        address = profile.name

    live = await observe_stores(providers.registry, profile.coordinates, radius)
    if live is not None:
        ratio = ref.STORE_TO_POPULATION_RATIO[profile.area_type]
        profile = profile.model_copy(
            update={"population": _blend_population(profile.population, live, ratio, curated)}
        )

    return PopulationEstimate(
        location=location,
        address=address,
        curated=curated,
        profile=profile,
        live=live,
        confidence=resolve_confidence(curated, live is not None),
    )


async def count_same_category(
    business_key: str,
    keyword: str,
    center: Coordinates,
    radius: int,
    providers: Providers,
) -> CompetitorCountEstimate:
    """Count same-category stores, preferring the registry over place search."""
    if providers.registry is not None:
        try:
            listing = await providers.registry.stores_in_radius(center, radius, rows=1000)
            if listing.items:
                matched = filter_same_category(listing.items, search_keywords(business_key, keyword))
                return CompetitorCountEstimate(
                    count=len(matched),
                    source=DataSource.SEMAS,
                    confidence=ConfidenceLevel.HIGH,
                    top_categories=top_categories((s.medium_category for s in matched), 5),
                )
        except Exception as e:
            logger.warning("Registry count failed for %s, falling back to place search: %s", business_key, e)

    try:
        code = ref.PLACE_CATEGORY_CODES.get(business_key)
        if code:
            count = await providers.places.category_total_count(code, center, radius)
        else:
            results = await providers.places.by_keyword(
                place_search_term(keyword, business_key), center=center, radius=radius, size=15
            )
            count = len(results)
        return CompetitorCountEstimate(
            count=count,
            source=DataSource.KAKAO_LOCAL,
            confidence=ConfidenceLevel.MEDIUM,
        )
    except Exception as e:
        logger.warning("Place search count failed for %s: %s", business_key, e)

    return CompetitorCountEstimate(count=0, confidence=ConfidenceLevel.LOW)


def competition_level(count: int) -> CompetitionLevel:
    thresholds = ref.COMPETITION_THRESHOLDS
    if count <= thresholds["low"]:
        return CompetitionLevel.LOW
    if count <= thresholds["medium"]:
        return CompetitionLevel.MEDIUM
    if count <= thresholds["high"]:
        return CompetitionLevel.HIGH
    return CompetitionLevel.SATURATED


async def estimate_competition(
    business_key: str,
    center: Coordinates,
    radius: int,
    registry: Optional[RegionalStoreRegistry],
) -> Optional[CompetitionEstimate]:
    """Competition level and its sales multiplier from registry data."""
    if registry is None:
        return None
    try:
        listing = await registry.stores_in_radius(center, radius, rows=500)
    except Exception as e:
        logger.warning("Competition lookup failed for %s: %s", business_key, e)
        return None

    matched = filter_same_category(
        listing.items, search_keywords(business_key, business_key), include_name=False
    )
    level = competition_level(len(matched))
    return CompetitionEstimate(
        count=len(matched),
        level=level,
        sales_multiplier=ref.COMPETITION_SALES_MULTIPLIERS[level.value],
        top_categories=top_categories((s.small_category for s in matched), 3),
    )
