"""Nearby facilities and accessibility."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ..core import reference_data as ref
from ..core.estimator import geocode
from ..core.models import (
    AccessibilityLevel,
    AnalyzedLocation,
    Coordinates,
    DataSource,
    ErrorCode,
    Facility,
    FacilityGroup,
    InsightTag,
    NearbyFacilitiesAnalysis,
    ToolResult,
)
from ..core.providers import Providers
from ..core.scoring import accessibility_level, accessibility_score
from . import tool_boundary

logger = logging.getLogger(__name__)


async def _search_category(providers: Providers, category: str, code: str, center: Coordinates, radius: int) -> list:
    if category == ref.BUS_STOP:
        # No category group code covers bus stops
        return await providers.places.by_keyword(
            ref.BUS_STOP, center=center, radius=radius, size=ref.FACILITY_PAGE_SIZE, sort="distance"
        )
    return await providers.places.by_category(code, center, radius=radius, size=ref.FACILITY_PAGE_SIZE)


def facility_insights(groups: list[FacilityGroup], level: AccessibilityLevel) -> list[InsightTag]:
    counts = {g.category: g.count for g in groups if not g.failed}
    insights = []
    if "지하철역" in counts:
        insights.append(InsightTag.SUBWAY_NEARBY if counts["지하철역"] > 0 else InsightTag.NO_SUBWAY)
    if counts.get(ref.BUS_STOP, 0) >= 3:
        insights.append(InsightTag.BUS_ACCESS)
    if "주차장" in counts:
        if counts["주차장"] >= 2:
            insights.append(InsightTag.PARKING_AVAILABLE)
        elif counts["주차장"] == 0:
            insights.append(InsightTag.PARKING_SHORTAGE)
    if counts.get("은행", 0) >= 2:
        insights.append(InsightTag.BANKING_ACCESS)
    if counts.get("편의점", 0) >= 3:
        insights.append(InsightTag.AMENITY_CLUSTER)
    if level is AccessibilityLevel.EXCELLENT:
        insights.append(InsightTag.ACCESSIBILITY_EXCELLENT)
    elif level is AccessibilityLevel.POOR:
        insights.append(InsightTag.ACCESSIBILITY_POOR)
    return insights


@tool_boundary(ErrorCode.ANALYSIS_FAILED)
async def analyze_nearby_facilities(
    location: str,
    providers: Providers,
    radius: int = 500,
    categories: Optional[list[str]] = None,
) -> ToolResult:
    """Transit, parking, banks and other facilities around a location.

    Categories are searched concurrently; one that fails comes back empty
    with ``failed`` set instead of failing the whole analysis.
    """
    targets = ref.FACILITY_CATEGORIES
    if categories:
        targets = tuple((name, code) for name, code in ref.FACILITY_CATEGORIES if name in categories)
        if not targets:
            valid = ", ".join(name for name, _ in ref.FACILITY_CATEGORIES)
            raise ValueError(f"지원하는 시설 카테고리: {valid}")

    place = await geocode(providers, location)
    center = place.coordinates

    results = await asyncio.gather(
        *[_search_category(providers, name, code, center, radius) for name, code in targets],
        return_exceptions=True,
    )

    groups = []
    for (name, code), result in zip(targets, results):
        if isinstance(result, Exception):
            logger.warning("Failed to search %s (%s): %s", name, code, result)
            groups.append(FacilityGroup(category=name, count=0, failed=True))
            continue
        items = [
            Facility(name=p.name, category=name, address=p.address, distance=p.distance, phone=p.phone)
            for p in result
        ]
        groups.append(FacilityGroup(category=name, count=len(items), items=items))

    score = accessibility_score({g.category: g.count for g in groups})
    level = accessibility_level(score)

    analysis = NearbyFacilitiesAnalysis(
        location=AnalyzedLocation(name=location, address=place.address, coordinates=center),
        radius=radius,
        facilities=groups,
        total_count=sum(g.count for g in groups),
        accessibility_score=score,
        accessibility=level,
        insights=facility_insights(groups, level),
    )
    return ToolResult.ok(analysis, [DataSource.KAKAO_LOCAL])
