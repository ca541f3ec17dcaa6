"""Tests for business trends and regional market status."""

from unittest.mock import AsyncMock

import pytest

from startup_helper.core import reference_data as ref
from startup_helper.core.models import ErrorCode, InsightTag
from startup_helper.tools.trends import (
    aggregate_industries,
    budget_picks,
    get_business_trends,
    get_regional_market_status,
)

from conftest import make_listing, make_store


class TestBusinessTrends:
    @pytest.mark.asyncio
    async def test_nationwide(self):
        result = await get_business_trends()
        data = result.data
        assert data.region == "전국"
        assert data.matched_region is None
        assert data.regional_trends == []
        assert len(data.rising) == len(ref.TREND_SNAPSHOT["rising"])
        assert result.meta["sources"] == ["reference"]
        assert result.meta["data_source"] == ref.TREND_SNAPSHOT["data_source"]

    @pytest.mark.asyncio
    async def test_regional_overlay(self):
        result = await get_business_trends(region="부산 해운대구")
        assert result.data.matched_region == "부산"
        assert result.data.top_industries == list(ref.REGIONAL_TRENDS["부산"]["top_industries"])

    @pytest.mark.asyncio
    async def test_category_match_in_declining(self):
        result = await get_business_trends(category="치킨")
        match = result.data.category_match
        assert match.name == "치킨 프랜차이즈"
        assert match.growth_rate < 0

    @pytest.mark.asyncio
    async def test_no_category_match(self):
        result = await get_business_trends(category="우주선")
        assert result.data.category_match is None

    def test_budget_picks(self):
        assert budget_picks(None) == []
        assert budget_picks(30_000_000) == list(ref.BUDGET_PICKS[0][1])
        assert budget_picks(80_000_000) == list(ref.BUDGET_PICKS[1][1])
        assert budget_picks(300_000_000) == list(ref.BUDGET_PICKS[2][1])


class TestRegionalMarketStatus:
    def test_aggregate(self):
        stores = (
            [make_store(large="음식", large_code="I2", medium="한식")] * 3
            + [make_store(large="음식", large_code="I2", medium="카페")] * 2
            + [make_store(large="소매", large_code="G2", medium="편의점", medium_code="G204")]
        )
        stats = aggregate_industries(stores)
        assert [s.category for s in stats] == ["음식", "소매"]
        assert stats[0].count == 5
        assert [(c.name, c.count) for c in stats[0].subcategories] == [("한식", 3), ("카페", 2)]

    @pytest.mark.asyncio
    async def test_status(self, full_providers, registry):
        stores = [make_store(large="음식", large_code="I2")] * 4 + [make_store(large="소매", large_code="G2")]
        registry.stores_in_district = AsyncMock(return_value=make_listing(stores, total_count=1500))

        result = await get_regional_market_status("1168064000", full_providers)

        data = result.data
        assert data.total_stores == 1500
        assert data.top_categories[0].category == "음식"
        assert InsightTag.DENSE_DISTRICT in data.insights
        assert InsightTag.FOOD_DOMINANT in data.insights
        registry.stores_in_district.assert_awaited_once_with("1168064000", rows=10000)

    @pytest.mark.asyncio
    async def test_registry_not_configured(self, providers):
        result = await get_regional_market_status("1168064000", providers)
        assert result.error.code is ErrorCode.API_UNAVAILABLE
        assert "SEMAS_API_KEY" in result.error.suggestion

    @pytest.mark.asyncio
    async def test_registry_failure(self, full_providers, registry):
        registry.stores_in_district = AsyncMock(side_effect=RuntimeError("result code 03"))
        result = await get_regional_market_status("1168064000", full_providers)
        assert result.error.code is ErrorCode.API_UNAVAILABLE

    @pytest.mark.asyncio
    async def test_invalid_code(self, full_providers, registry):
        result = await get_regional_market_status("강남구", full_providers)
        assert result.error.code is ErrorCode.INVALID_INPUT
        registry.stores_in_district.assert_not_awaited()
