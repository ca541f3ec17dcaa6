"""Commercial area analysis and multi-location comparison."""

from __future__ import annotations

import asyncio
import logging

from ..core import reference_data as ref
from ..core.errors import ToolError
from ..core.estimator import count_same_category, geocode
from ..core.models import (
    AnalyzedLocation,
    CommercialAreaAnalysis,
    CommercialAreaComparison,
    DataSource,
    DensityAnalysis,
    ErrorCode,
    ToolResult,
)
from ..core.providers import Providers
from ..core.ranking import rank_locations
from ..core.reference import normalize_business_type
from ..core.scoring import (
    classify_district,
    district_characteristics,
    location_score,
    location_tier,
    saturation_level,
    saturation_score,
)
from . import tool_boundary

logger = logging.getLogger(__name__)

MAX_COMPARE_LOCATIONS = 10


async def _category_breakdown(providers: Providers, center, radius: int) -> dict[str, int]:
    """Total count per district category; a failed category counts as zero."""
    tasks = [providers.places.category_total_count(code, center, radius) for _, code in ref.DISTRICT_CATEGORIES]
    results = await asyncio.gather(*tasks, return_exceptions=True)

    breakdown = {}
    for (name, code), result in zip(ref.DISTRICT_CATEGORIES, results):
        if isinstance(result, Exception):
            logger.warning("Failed to count %s (%s): %s", name, code, result)
            breakdown[name] = 0
        else:
            breakdown[name] = result
    return breakdown


async def _analyze(
    location: str,
    business_type: str,
    providers: Providers,
    radius: int,
) -> tuple[CommercialAreaAnalysis, list[DataSource]]:
    business_key = normalize_business_type(business_type)
    place = await geocode(providers, location)
    center = place.coordinates

    breakdown, same = await asyncio.gather(
        _category_breakdown(providers, center, radius),
        count_same_category(business_key, business_type, center, radius, providers),
    )

    saturation = saturation_score(business_key, same.count)
    total = sum(breakdown.values())
    score = location_score(saturation, total, same.count, breakdown)

    analysis = CommercialAreaAnalysis(
        location=AnalyzedLocation(name=location, address=place.address, coordinates=center),
        business_type=business_key if business_key != ref.UNKNOWN_BUSINESS else business_type.strip(),
        radius=radius,
        district_type=classify_district(breakdown),
        characteristics=district_characteristics(breakdown, location),
        density=DensityAnalysis(
            total_stores=total,
            category_breakdown=breakdown,
            same_category_count=same.count,
            same_category_source=same.source,
            saturation_score=saturation,
            saturation_level=saturation_level(saturation),
        ),
        location_score=score,
        tier=location_tier(score.value),
        confidence=same.confidence,
    )

    sources = [DataSource.KAKAO_LOCAL]
    if same.source is DataSource.SEMAS:
        sources.append(DataSource.SEMAS)
    return analysis, sources


@tool_boundary(ErrorCode.ANALYSIS_FAILED)
async def analyze_commercial_area(
    location: str,
    business_type: str,
    providers: Providers,
    radius: int = 500,
) -> ToolResult:
    """Store density, saturation and a location score around one place."""
    analysis, sources = await _analyze(location, business_type, providers, radius)
    return ToolResult.ok(analysis, sources)


@tool_boundary(ErrorCode.COMPARISON_FAILED)
async def compare_commercial_areas(
    locations: list[str],
    business_type: str,
    providers: Providers,
    radius: int = 500,
) -> ToolResult:
    """Analyze several locations concurrently and rank them.

    Locations that fail to resolve or analyze are reported in ``failed``
    and left out of the ranking. If none succeed the comparison fails with
    NO_VALID_LOCATIONS.
    """
    locations = list(dict.fromkeys(loc.strip() for loc in locations if loc and loc.strip()))
    if len(locations) > MAX_COMPARE_LOCATIONS:
        raise ValueError(f"한 번에 최대 {MAX_COMPARE_LOCATIONS}곳까지 비교할 수 있습니다.")

    results = await asyncio.gather(
        *[_analyze(loc, business_type, providers, radius) for loc in locations],
        return_exceptions=True,
    )

    analyses: list[CommercialAreaAnalysis] = []
    failed: list[str] = []
    sources = {DataSource.KAKAO_LOCAL}
    for loc, result in zip(locations, results):
        if isinstance(result, Exception):
            level = logging.INFO if isinstance(result, ToolError) else logging.WARNING
            logger.log(level, "Dropping %s from comparison: %s", loc, result)
            failed.append(loc)
            continue
        analysis, used = result
        analyses.append(analysis)
        sources.update(used)

    ranking, summary = rank_locations((a.location.name, a.location_score) for a in analyses)
    by_name = {a.location.name: a for a in analyses}

    comparison = CommercialAreaComparison(
        business_type=analyses[0].business_type,
        requested=locations,
        failed=failed,
        locations=[by_name[r.identity] for r in ranking],
        ranking=ranking,
        summary=summary,
    )
    return ToolResult.ok(comparison, sorted(sources, key=lambda s: s.value))
