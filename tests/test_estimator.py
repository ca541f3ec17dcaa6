"""Tests for the confidence-weighted estimator."""

from unittest.mock import AsyncMock

import pytest

from startup_helper.core import reference_data as ref
from startup_helper.core.errors import ToolError
from startup_helper.core.estimator import (
    blend,
    competition_level,
    count_same_category,
    estimate_competition,
    estimate_population,
    filter_same_category,
    geocode,
    resolve_confidence,
)
from startup_helper.core.models import AreaType, CompetitionLevel, ConfidenceLevel, DataSource, ErrorCode
from startup_helper.core.scoring import round_half_up

from conftest import SEOUL_CITY_HALL, make_listing, make_store


class TestConfidence:
    @pytest.mark.parametrize("curated,live,expected", [
        (True, True, ConfidenceLevel.HIGH),
        (True, False, ConfidenceLevel.MEDIUM),
        (False, True, ConfidenceLevel.MEDIUM),
        (False, False, ConfidenceLevel.LOW),
    ])
    def test_levels(self, curated, live, expected):
        assert resolve_confidence(curated, live) is expected

    def test_blend(self):
        assert blend(100, 200, curated=True) == 130
        assert blend(100, 200, curated=False) == 200

    def test_blend_rounds_half_up(self):
        # 0.7 * 10 + 0.3 * 5 = 8.5
        assert blend(10, 5, curated=True) == 9
        assert blend(0, 2.5, curated=False) == 3


class TestGeocode:
    @pytest.mark.asyncio
    async def test_not_found(self, providers, geocoder):
        geocoder.resolve = AsyncMock(return_value=None)
        with pytest.raises(ToolError) as exc_info:
            await geocode(providers, "없는곳")
        assert exc_info.value.code is ErrorCode.LOCATION_NOT_FOUND

    @pytest.mark.asyncio
    async def test_geocoder_failure(self, providers, geocoder):
        geocoder.resolve = AsyncMock(side_effect=RuntimeError("boom"))
        with pytest.raises(ToolError) as exc_info:
            await geocode(providers, "강남역")
        assert exc_info.value.code is ErrorCode.API_UNAVAILABLE

    @pytest.mark.asyncio
    async def test_invalid_query_propagates(self, providers, geocoder):
        geocoder.resolve = AsyncMock(side_effect=ValueError("too short"))
        with pytest.raises(ValueError):
            await geocode(providers, "a")


class TestPopulation:
    @pytest.mark.asyncio
    async def test_curated_without_registry(self, providers, geocoder):
        estimate = await estimate_population("강남역", providers)
        assert estimate.curated
        assert estimate.confidence is ConfidenceLevel.MEDIUM
        assert estimate.profile == ref.AREA_PROFILES["강남역"]
        geocoder.resolve.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_curated_with_live_counts(self, full_providers, registry):
        registry.stores_in_radius = AsyncMock(return_value=make_listing([make_store()] * 3, total_count=1000))
        estimate = await estimate_population("강남역", full_providers)

        static = ref.AREA_PROFILES["강남역"]
        live_total = 1000 * ref.STORE_TO_POPULATION_RATIO[static.area_type]
        assert estimate.confidence is ConfidenceLevel.HIGH
        assert estimate.live.store_count == 1000
        assert estimate.profile.population.total == round_half_up(0.7 * static.population.total + 0.3 * live_total)
        assert estimate.profile.time_distribution == static.time_distribution

    @pytest.mark.asyncio
    async def test_uncurated_uses_pattern(self, providers):
        estimate = await estimate_population("신림역", providers)
        assert not estimate.curated
        assert estimate.confidence is ConfidenceLevel.LOW
        assert estimate.profile.name == "신림역"
        assert estimate.profile.coordinates == SEOUL_CITY_HALL
        assert estimate.address == "서울 중구 세종대로 110"

    @pytest.mark.asyncio
    async def test_uncurated_with_live_counts(self, full_providers, registry):
        registry.stores_in_radius = AsyncMock(return_value=make_listing([make_store()] * 3, total_count=101))

        estimate = await estimate_population("신림역", full_providers)

        assert not estimate.curated
        assert estimate.confidence is ConfidenceLevel.MEDIUM
        assert estimate.profile.area_type is AreaType.STATION
        # 101 stores * 150 visitors per store, split 20/40/40
        population = estimate.profile.population
        assert population.total == 101 * ref.STORE_TO_POPULATION_RATIO[AreaType.STATION] == 15150
        assert population.residential == 3030
        assert population.working == 6060
        assert population.floating == 6060
        pattern = ref.AREA_TYPE_PATTERNS[AreaType.STATION]
        assert estimate.profile.age_distribution == pattern.age_distribution

    @pytest.mark.asyncio
    async def test_registry_failure_lowers_confidence(self, full_providers, registry):
        registry.stores_in_radius = AsyncMock(side_effect=RuntimeError("timeout"))
        estimate = await estimate_population("강남역", full_providers)
        assert estimate.live is None
        assert estimate.confidence is ConfidenceLevel.MEDIUM


class TestSameCategory:
    def test_filter_by_name_and_labels(self):
        stores = [
            make_store(name="동네커피", large="음식", medium="비알코올"),
            make_store(name="김밥천국", large="음식", medium="분식"),
            make_store(name="무명", large="음식", medium="카페"),
        ]
        matched = filter_same_category(stores, ("커피", "카페"))
        assert [s.name for s in matched] == ["동네커피", "무명"]
        assert len(filter_same_category(stores, ("커피",), include_name=False)) == 0

    @pytest.mark.asyncio
    async def test_registry_preferred(self, full_providers, registry, places):
        stores = [make_store(name="카페A"), make_store(name="카페B"), make_store(name="식당", medium="한식")]
        registry.stores_in_radius = AsyncMock(return_value=make_listing(stores))
        result = await count_same_category("카페", "카페", SEOUL_CITY_HALL, 500, full_providers)
        assert result.count == 2
        assert result.source is DataSource.SEMAS
        assert result.confidence is ConfidenceLevel.HIGH
        places.category_total_count.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_falls_back_to_place_search(self, full_providers, registry, places):
        registry.stores_in_radius = AsyncMock(side_effect=RuntimeError("down"))
        places.category_total_count = AsyncMock(return_value=8)
        result = await count_same_category("카페", "카페", SEOUL_CITY_HALL, 500, full_providers)
        assert result.count == 8
        assert result.source is DataSource.KAKAO_LOCAL
        assert result.confidence is ConfidenceLevel.MEDIUM

    @pytest.mark.asyncio
    async def test_keyword_search_without_category_code(self, providers, places):
        places.by_keyword = AsyncMock(return_value=[object()] * 4)
        result = await count_same_category("치킨", "치킨", SEOUL_CITY_HALL, 500, providers)
        assert result.count == 4
        assert places.by_keyword.await_args.args[0] == "치킨집"

    @pytest.mark.asyncio
    async def test_single_character_keyword_uses_business_term(self, providers, places):
        places.by_keyword = AsyncMock(return_value=[object()] * 3)
        result = await count_same_category("베이커리", "빵", SEOUL_CITY_HALL, 500, providers)
        assert result.count == 3
        assert result.source is DataSource.KAKAO_LOCAL
        assert places.by_keyword.await_args.args[0] == "빵집"

    @pytest.mark.asyncio
    async def test_everything_fails(self, providers, places):
        places.category_total_count = AsyncMock(side_effect=RuntimeError("down"))
        result = await count_same_category("카페", "카페", SEOUL_CITY_HALL, 500, providers)
        assert result.count == 0
        assert result.source is None
        assert result.confidence is ConfidenceLevel.LOW


class TestCompetition:
    @pytest.mark.parametrize("count,level", [
        (0, CompetitionLevel.LOW),
        (5, CompetitionLevel.LOW),
        (15, CompetitionLevel.MEDIUM),
        (30, CompetitionLevel.HIGH),
        (31, CompetitionLevel.SATURATED),
    ])
    def test_levels(self, count, level):
        assert competition_level(count) is level

    @pytest.mark.asyncio
    async def test_without_registry(self):
        assert await estimate_competition("카페", SEOUL_CITY_HALL, 500, None) is None

    @pytest.mark.asyncio
    async def test_multiplier(self, registry):
        registry.stores_in_radius = AsyncMock(return_value=make_listing([make_store()] * 40))
        result = await estimate_competition("카페", SEOUL_CITY_HALL, 500, registry)
        assert result.level is CompetitionLevel.SATURATED
        assert result.sales_multiplier == 0.7
        assert result.top_categories[0].count == 40
