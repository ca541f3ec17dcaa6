"""Tests for nearby facility analysis."""

from unittest.mock import AsyncMock

import pytest

from startup_helper.core import reference_data as ref
from startup_helper.core.models import AccessibilityLevel, ErrorCode, InsightTag
from startup_helper.tools.facilities import analyze_nearby_facilities

from conftest import make_place


def places_by_code(counts):
    async def _by_category(code, center, radius=500, size=15, sort="distance"):
        value = counts.get(code, 0)
        if isinstance(value, Exception):
            raise value
        return [make_place(name=f"{code}-{i}", distance=100 + i) for i in range(value)]
    return _by_category


class TestNearbyFacilities:
    @pytest.mark.asyncio
    async def test_station_area(self, providers, places):
        places.by_category = AsyncMock(side_effect=places_by_code({"SW8": 2, "BK9": 3, "PK6": 2, "CS2": 5}))
        places.by_keyword = AsyncMock(return_value=[make_place(name=f"정류장{i}") for i in range(4)])

        result = await analyze_nearby_facilities("강남역", providers)

        assert result.success
        data = result.data
        groups = {g.category: g for g in data.facilities}
        assert groups["지하철역"].count == 2
        assert groups[ref.BUS_STOP].count == 4
        # 30 subway + 15 bus + 10 bank + 6 parking + 10 convenience
        assert data.accessibility_score == 71
        assert data.accessibility is AccessibilityLevel.EXCELLENT
        for tag in (InsightTag.SUBWAY_NEARBY, InsightTag.BUS_ACCESS, InsightTag.PARKING_AVAILABLE,
                    InsightTag.BANKING_ACCESS, InsightTag.AMENITY_CLUSTER, InsightTag.ACCESSIBILITY_EXCELLENT):
            assert tag in data.insights
        assert places.by_keyword.await_args.args[0] == ref.BUS_STOP

    @pytest.mark.asyncio
    async def test_failed_category_degrades(self, providers, places):
        places.by_category = AsyncMock(side_effect=places_by_code({"SW8": RuntimeError("timeout"), "PK6": 0}))

        result = await analyze_nearby_facilities("어느 동네", providers)

        assert result.success
        groups = {g.category: g for g in result.data.facilities}
        assert groups["지하철역"].failed
        assert groups["지하철역"].count == 0
        assert InsightTag.NO_SUBWAY not in result.data.insights
        assert InsightTag.PARKING_SHORTAGE in result.data.insights
        assert InsightTag.ACCESSIBILITY_POOR in result.data.insights

    @pytest.mark.asyncio
    async def test_selected_categories(self, providers, places):
        places.by_category = AsyncMock(side_effect=places_by_code({"PK6": 1}))

        result = await analyze_nearby_facilities("강남역", providers, categories=["주차장", "없는시설"])

        assert [g.category for g in result.data.facilities] == ["주차장"]
        assert InsightTag.NO_SUBWAY not in result.data.insights
        places.by_keyword.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_categories(self, providers):
        result = await analyze_nearby_facilities("강남역", providers, categories=["없는시설"])
        assert result.error.code is ErrorCode.INVALID_INPUT
        assert "지하철역" in result.error.message

    @pytest.mark.asyncio
    async def test_location_not_found(self, providers, geocoder):
        geocoder.resolve = AsyncMock(return_value=None)
        result = await analyze_nearby_facilities("없는곳", providers)
        assert result.error.code is ErrorCode.LOCATION_NOT_FOUND
