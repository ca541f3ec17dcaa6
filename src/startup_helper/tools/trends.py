"""Industry trends and district-level market status."""

from __future__ import annotations

import logging
from typing import Optional

from ..core import reference_data as ref
from ..core.errors import ToolError
from ..core.models import (
    BusinessTrends,
    CategoryCount,
    DataSource,
    ErrorCode,
    IndustryStat,
    InsightTag,
    RegionalMarketStatus,
    StoreRecord,
    ToolResult,
    TrendingBusiness,
)
from ..core.providers import Providers
from . import tool_boundary

logger = logging.getLogger(__name__)

DISTRICT_ROWS = 10000
TOP_INDUSTRIES = 5


def _trending(entries) -> list[TrendingBusiness]:
    return [TrendingBusiness(**entry) for entry in entries]


def match_category(category: str, rising: list[TrendingBusiness], declining: list[TrendingBusiness]) -> Optional[TrendingBusiness]:
    needle = category.strip().lower()
    if not needle:
        return None
    for trend in rising + declining:
        if needle in trend.name.lower():
            return trend
    return None


def budget_picks(budget: Optional[float]) -> list[str]:
    """Suggested businesses for a budget in 원."""
    if not budget:
        return []
    for ceiling, picks in ref.BUDGET_PICKS:
        if budget < ceiling:
            return list(picks)
    return []


@tool_boundary(ErrorCode.TREND_FAILED)
async def get_business_trends(
    region: Optional[str] = None,
    category: Optional[str] = None,
    budget: Optional[float] = None,
) -> ToolResult:
    """Rising and declining industries, with a regional overlay when the region is covered."""
    snapshot = ref.TREND_SNAPSHOT
    rising = _trending(snapshot["rising"])
    declining = _trending(snapshot["declining"])

    matched_region = None
    if region:
        matched_region = next((r for r in ref.REGIONAL_TRENDS if r in region), None)
    regional = ref.REGIONAL_TRENDS.get(matched_region, {}) if matched_region else {}

    trends = BusinessTrends(
        period=snapshot["period"],
        region=region or "전국",
        matched_region=matched_region,
        rising=rising,
        declining=declining,
        regional_trends=list(regional.get("trends", ())),
        top_industries=list(regional.get("top_industries", ())),
        category_match=match_category(category, rising, declining) if category else None,
        budget_picks=budget_picks(budget),
        highlights=list(snapshot["highlights"]),
    )
    return ToolResult.ok(trends, [DataSource.REFERENCE], data_source=snapshot["data_source"])


def aggregate_industries(stores: list[StoreRecord]) -> list[IndustryStat]:
    """Group stores by large category, with medium-category breakdowns, largest first."""
    groups: dict[str, dict] = {}
    for store in stores:
        key = store.large_code or store.large_category
        group = groups.setdefault(key, {"category": store.large_category, "code": store.large_code, "subs": {}})
        sub_name = store.medium_category or "기타"
        group["subs"][sub_name] = group["subs"].get(sub_name, 0) + 1

    stats = []
    for group in groups.values():
        subs = sorted(group["subs"].items(), key=lambda kv: kv[1], reverse=True)
        stats.append(IndustryStat(
            category=group["category"] or "기타",
            code=group["code"],
            count=sum(count for _, count in subs),
            subcategories=[CategoryCount(name=name, count=count) for name, count in subs],
        ))
    return sorted(stats, key=lambda s: s.count, reverse=True)


@tool_boundary(ErrorCode.REGIONAL_STATS_FAILED, suggestion="행정동 코드(10자리 숫자)가 올바른지 확인해 주세요.")
async def get_regional_market_status(district_code: str, providers: Providers) -> ToolResult:
    """Store mix of one administrative district from the store registry."""
    district_code = (district_code or "").strip()
    if not district_code.isdigit():
        raise ValueError(f"행정동 코드는 숫자여야 합니다: {district_code!r}")
    if providers.registry is None:
        raise ToolError(
            ErrorCode.API_UNAVAILABLE,
            "상권정보 API가 설정되지 않았습니다.",
            suggestion="SEMAS_API_KEY 환경변수를 설정해 주세요.",
        )

    try:
        listing = await providers.registry.stores_in_district(district_code, rows=DISTRICT_ROWS)
    except Exception as e:
        logger.warning("District lookup failed for %s: %s", district_code, e)
        raise ToolError(
            ErrorCode.API_UNAVAILABLE,
            f"상권정보 조회에 실패했습니다: {e}",
            suggestion="잠시 후 다시 시도해 주세요.",
        ) from e

    industries = aggregate_industries(listing.items)
    total = listing.total_count or len(listing.items)
    insights = []
    if total > ref.DENSE_DISTRICT_STORES:
        insights.append(InsightTag.DENSE_DISTRICT)
    if industries and "음식" in industries[0].category:
        insights.append(InsightTag.FOOD_DOMINANT)

    status = RegionalMarketStatus(
        district_code=district_code,
        total_stores=total,
        top_categories=industries[:TOP_INDUSTRIES],
        insights=insights,
    )
    return ToolResult.ok(status, [DataSource.SEMAS])
