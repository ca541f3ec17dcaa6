"""Composite scoring for locations and business fit.

Every score is a sum of capped components. Each component records its raw
input and contribution so a caller can show why a location scored the way
it did. Results are rounded and clamped to 0-100.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Mapping

from . import reference_data as ref
from .models import (
    AccessibilityLevel,
    AreaProfile,
    BusinessFit,
    CompositeScore,
    DistrictType,
    FitTier,
    GenderPreference,
    InsightTag,
    LocationTier,
    SaturationLevel,
    ScoreComponent,
)

logger = logging.getLogger(__name__)

FIT_BASE_SCORE = 50


def round_half_up(value: float) -> int:
    """Round halves up (2.5 -> 3, 12.5 -> 13); round() would round them to even."""
    return math.floor(value + 0.5)


def _clamp(value: float, low: float = 0, high: float = 100) -> float:
    return max(low, min(high, value))


def compose(components: Iterable[ScoreComponent], base: float = 0) -> CompositeScore:
    components = list(components)
    total = base + sum(c.contribution for c in components)
    return CompositeScore(value=int(_clamp(round_half_up(total))), base=base, components=components)


# ─── Saturation ──────────────────────────────────────────────────────────────


def saturation_score(business_key: str, same_category_count: int) -> int:
    """Same-category count as a percentage of what the district supports."""
    optimal = ref.OPTIMAL_STORE_COUNTS.get(business_key, ref.DEFAULT_OPTIMAL_STORE_COUNT)
    return min(100, round_half_up(same_category_count / optimal * 100))


def saturation_level(score: int) -> SaturationLevel:
    if score >= 80:
        return SaturationLevel.SATURATED
    if score >= 60:
        return SaturationLevel.HIGH
    if score >= 40:
        return SaturationLevel.MEDIUM
    return SaturationLevel.LOW


# ─── Location ────────────────────────────────────────────────────────────────


def _activity_points(total_stores: int) -> int:
    if total_stores >= 1000:
        return 25
    if total_stores >= 500:
        return 20
    if total_stores >= 200:
        return 15
    if total_stores >= 100:
        return 10
    return 5


def _competition_points(same_category_count: int) -> int:
    if same_category_count >= 20:
        return 5
    if same_category_count >= 15:
        return 10
    if same_category_count >= 10:
        return 15
    return 20


def location_score(
    saturation: int,
    total_stores: int,
    same_category_count: int,
    category_breakdown: Mapping[str, int],
) -> CompositeScore:
    """Location attractiveness out of 100.

    Components: low saturation (40), commercial activity (25), low direct
    competition (20) and category diversity (15).
    """
    saturation = _clamp(saturation)
    active_categories = sum(1 for count in category_breakdown.values() if count > 0)
    components = [
        ScoreComponent(name="saturation", raw_value=saturation, contribution=max(0.0, 40 - saturation * 0.4), max_contribution=40),
        ScoreComponent(name="activity", raw_value=total_stores, contribution=_activity_points(total_stores), max_contribution=25),
        ScoreComponent(
            name="competition",
            raw_value=same_category_count,
            contribution=_competition_points(same_category_count),
            max_contribution=20,
        ),
        ScoreComponent(
            name="diversity",
            raw_value=active_categories,
            contribution=min(15, 3 * active_categories),
            max_contribution=15,
        ),
    ]
    return compose(components)


def location_tier(score: int) -> LocationTier:
    if score >= 70:
        return LocationTier.RECOMMENDED
    if score >= 40:
        return LocationTier.NEUTRAL
    return LocationTier.NOT_RECOMMENDED


# ─── Business fit ────────────────────────────────────────────────────────────


def fit_score(profile: AreaProfile, fit: BusinessFit) -> CompositeScore:
    """How well an area's demographics match a business's target customers."""
    ages = profile.age_distribution.model_dump()
    age_share = sum(ages.get(group, 0) for group in fit.preferred_age_groups)

    components = [
        ScoreComponent(name="age", raw_value=age_share, contribution=min(age_share * 0.4, 20), max_contribution=20),
    ]

    if fit.preferred_gender is GenderPreference.ANY:
        components.append(ScoreComponent(name="gender", raw_value=50, contribution=5, max_contribution=10))
    else:
        ratio = profile.gender_ratio
        share = ratio.female if fit.preferred_gender is GenderPreference.FEMALE else ratio.male
        bonus = min((share - 50) * 0.5, 10) if share > 50 else 0
        components.append(ScoreComponent(name="gender", raw_value=share, contribution=bonus, max_contribution=10))

    area_match = profile.area_type in fit.preferred_area_types
    components.append(
        ScoreComponent(name="area_type", raw_value=int(area_match), contribution=15 if area_match else 0, max_contribution=15)
    )

    slots = profile.time_distribution.model_dump()
    time_share = sum(slots.get(slot, 0) for slot in fit.preferred_time_slots)
    components.append(
        ScoreComponent(name="time", raw_value=time_share, contribution=min(time_share * 0.2, 10), max_contribution=10)
    )
    return compose(components, base=FIT_BASE_SCORE)


def fit_tier(score: int) -> FitTier:
    if score >= 80:
        return FitTier.EXCELLENT
    if score >= 60:
        return FitTier.GOOD
    if score >= 40:
        return FitTier.MODERATE
    return FitTier.POOR


# ─── District shape ──────────────────────────────────────────────────────────


def classify_district(breakdown: Mapping[str, int]) -> DistrictType:
    total = sum(breakdown.values())
    if total > 50:
        return DistrictType.DEVELOPED
    if breakdown.get("음식점", 0) > 20:
        return DistrictType.FOOD_ALLEY
    if breakdown.get("카페", 0) > 10:
        return DistrictType.CAFE_STREET
    if total < 20:
        return DistrictType.SIDE_STREET
    return DistrictType.GENERAL


def district_characteristics(breakdown: Mapping[str, int], location: str) -> list[InsightTag]:
    tags = []
    if sum(breakdown.values()) > 40:
        tags.append(InsightTag.BUSY_FOOT_TRAFFIC)
    if breakdown.get("카페", 0) > 8:
        tags.append(InsightTag.CAFE_CLUSTER)
    if breakdown.get("음식점", 0) > 15:
        tags.append(InsightTag.RESTAURANT_CLUSTER)
    if breakdown.get("편의점", 0) > 3:
        tags.append(InsightTag.GOOD_AMENITIES)
    if "역" in location:
        tags.append(InsightTag.STATION_AREA)
    if "대학" in location or "학교" in location:
        tags.append(InsightTag.STUDENT_AREA)
    return tags or [InsightTag.QUIET_RESIDENTIAL]


# ─── Accessibility ───────────────────────────────────────────────────────────

_PRESENCE_POINTS = {"지하철역": 30, "은행": 10, "병원": 5, "약국": 5}
_PER_ITEM_POINTS = {"버스정류장": (5, 15), "주차장": (3, 10), "편의점": (2, 10)}
_OTHER_PRESENCE_POINTS = 3


def accessibility_score(facility_counts: Mapping[str, int]) -> int:
    score = 0
    for category, count in facility_counts.items():
        if count <= 0:
            continue
        if category in _PRESENCE_POINTS:
            score += _PRESENCE_POINTS[category]
        elif category in _PER_ITEM_POINTS:
            per_item, cap = _PER_ITEM_POINTS[category]
            score += min(per_item * count, cap)
        else:
            score += _OTHER_PRESENCE_POINTS
    return min(100, score)


def accessibility_level(score: int) -> AccessibilityLevel:
    if score >= 60:
        return AccessibilityLevel.EXCELLENT
    if score >= 40:
        return AccessibilityLevel.GOOD
    if score >= 20:
        return AccessibilityLevel.FAIR
    return AccessibilityLevel.POOR
