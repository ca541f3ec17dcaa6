"""Tests for competitor search."""

from unittest.mock import AsyncMock

import httpx
import pytest

from startup_helper.core.clients import KakaoLocalClient
from startup_helper.core.models import ConfidenceLevel, ErrorCode, InsightTag
from startup_helper.core.providers import Providers
from startup_helper.tools.competitors import find_competitors, market_gap

from conftest import make_listing, make_place, make_store


class TestMarketGap:
    @pytest.mark.parametrize("total,ratio,tag", [
        (0, 0, InsightTag.NO_COMPETITION),
        (3, 100, InsightTag.FEW_COMPETITORS),
        (8, 75, InsightTag.FRANCHISE_DOMINANT),
        (8, 20, InsightTag.INDEPENDENT_DOMINANT),
        (12, 50, InsightTag.INTENSE_COMPETITION),
        (6, 50, InsightTag.BALANCED_COMPETITION),
    ])
    def test_tags(self, total, ratio, tag):
        assert market_gap(total, ratio) is tag


class TestFindCompetitors:
    @pytest.mark.asyncio
    async def test_nearby_search(self, providers, places):
        places.by_keyword = AsyncMock(return_value=[
            make_place(name="스타벅스 강남점", distance=50),
            make_place(name="동네커피", distance=120),
        ])

        result = await find_competitors("강남역", "커피", providers)

        assert result.success
        data = result.data
        assert data.business_type == "카페"
        assert data.total_count == 2
        assert data.franchise_ratio == 50
        assert data.confidence is ConfidenceLevel.MEDIUM
        assert InsightTag.FIRST_MOVER_OPPORTUNITY in data.insights
        call = places.by_keyword.await_args_list[0]
        assert call.args[0] == "카페"
        assert call.kwargs["sort"] == "distance"

    @pytest.mark.asyncio
    async def test_single_character_business_type(self, geocoder):
        queries = []

        def handler(request):
            queries.append(request.url.params["query"])
            docs = [
                {"id": "1", "place_name": "파리바게뜨 강남역점", "x": "127.0276", "y": "37.498", "distance": "80"},
                {"id": "2", "place_name": "동네빵집", "x": "127.0281", "y": "37.499", "distance": "150"},
            ]
            return httpx.Response(200, json={"meta": {"total_count": 2}, "documents": docs})

        kakao = KakaoLocalClient("key", transport=httpx.MockTransport(handler))
        result = await find_competitors("강남역", "빵", Providers(geocoder=geocoder, places=kakao))

        assert result.success
        assert result.data.business_type == "베이커리"
        assert result.data.total_count == 2
        assert queries == ["빵집"]

    @pytest.mark.asyncio
    async def test_widens_to_location_query(self, providers, geocoder, places):
        geocoder.resolve = AsyncMock(side_effect=RuntimeError("geocoder down"))
        places.by_keyword = AsyncMock(side_effect=[[], [make_place(name="교촌치킨")]])

        result = await find_competitors("망원동", "치킨", providers)

        assert result.success
        assert [c.name for c in result.data.competitors] == ["교촌치킨"]
        queries = [c.args[0] for c in places.by_keyword.await_args_list]
        assert queries == ["망원동 치킨집", "망원동 치킨"]

    @pytest.mark.asyncio
    async def test_no_competitors(self, providers):
        result = await find_competitors("시골마을", "카페", providers)
        assert result.data.total_count == 0
        assert result.data.franchise_ratio == 0
        assert result.data.market_gap is InsightTag.NO_COMPETITION

    @pytest.mark.asyncio
    async def test_registry_enrichment(self, full_providers, places, registry):
        places.by_keyword = AsyncMock(return_value=[make_place(name="동네커피")])
        stores = [make_store(name="동네커피")] + [make_store(name=f"카페{i}") for i in range(24)]
        registry.stores_in_radius = AsyncMock(return_value=make_listing(stores))

        result = await find_competitors("강남역", "카페", full_providers, limit=5)

        data = result.data
        assert data.total_count == 25
        assert len(data.competitors) == 5
        assert [c.name for c in data.competitors].count("동네커피") == 1
        assert data.confidence is ConfidenceLevel.HIGH
        assert InsightTag.LIVE_REGISTRY_DATA in data.insights
        assert InsightTag.INTENSE_COMPETITION in data.insights
        assert data.top_categories[0].name == "카페"
        assert result.meta["sources"] == ["kakao_local", "semas"]

    @pytest.mark.asyncio
    async def test_search_failure(self, providers, places):
        places.by_keyword = AsyncMock(side_effect=RuntimeError("quota exceeded"))
        result = await find_competitors("강남역", "카페", providers)
        assert not result.success
        assert result.error.code is ErrorCode.COMPETITOR_SEARCH_FAILED
        assert "quota exceeded" in result.error.message

    @pytest.mark.asyncio
    async def test_invalid_limit(self, providers):
        result = await find_competitors("강남역", "카페", providers, limit=0)
        assert result.error.code is ErrorCode.INVALID_INPUT
