"""Tests for policy fund recommendations."""

from unittest.mock import AsyncMock

import pytest

from startup_helper.core.models import ErrorCode, GrantListing, InsightTag
from startup_helper.tools.policy_funds import fund_matches, recommend_policy_funds


def names(result):
    return [f.name for f in result.data.matched_funds]


class TestFundMatching:
    @pytest.mark.asyncio
    async def test_young_founder(self, providers):
        result = await recommend_policy_funds("카페", "예비창업", "서울 마포구", providers, founder_type="청년", founder_age=28)

        assert result.success
        assert "청년창업사관학교" in names(result)
        assert "서울시 청년창업지원" in names(result)
        assert "신사업창업사관학교" not in names(result)
        assert "소상공인 새출발기금" not in names(result)
        assert result.data.tip is InsightTag.TIP_MENTORING

    @pytest.mark.asyncio
    async def test_middle_aged_founder(self, providers):
        result = await recommend_policy_funds("음식점", "운영중", "부산", providers, founder_type="중장년", founder_age=50)

        assert result.success
        funds = result.data.matched_funds
        assert funds
        assert not any("39세" in r for f in funds for r in f.requirements)
        assert "신사업창업사관학교" in names(result)
        assert result.data.tip is InsightTag.TIP_GRANT_AND_LOAN

    @pytest.mark.asyncio
    async def test_women_founder(self, providers):
        result = await recommend_policy_funds("네일샵", "초기창업", "경기", providers, founder_type="여성", founder_age=35)
        assert any("여성" in name for name in names(result))

    @pytest.mark.asyncio
    async def test_restart_stage(self, providers):
        result = await recommend_policy_funds("치킨", "재창업", "대전", providers)
        assert "소상공인 새출발기금" in names(result)

    def test_seoul_only_fund(self):
        fund = {"requirements": ["서울 거주 또는 서울 창업"]}
        assert fund_matches(fund, "초기창업", "강남구")
        assert not fund_matches(fund, "초기창업", "부산 해운대구")


class TestPagination:
    @pytest.mark.asyncio
    async def test_pages(self, providers):
        first = await recommend_policy_funds("카페", "초기창업", "서울", providers, page=1, limit=2)
        second = await recommend_policy_funds("카페", "초기창업", "서울", providers, page=2, limit=2)

        assert len(first.data.matched_funds) == 2
        assert first.data.total_count == second.data.total_count
        assert not set(names(first)) & set(names(second))

    @pytest.mark.asyncio
    async def test_page_past_end(self, providers):
        result = await recommend_policy_funds("카페", "초기창업", "서울", providers, page=99, limit=10)
        assert result.data.matched_funds == []
        assert result.data.total_count > 0


class TestValidation:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("kwargs", [
        {"stage": "중년창업"},
        {"stage": "예비창업", "founder_type": "학생"},
        {"stage": "예비창업", "page": 0},
        {"stage": "예비창업", "limit": 51},
    ])
    async def test_invalid_input(self, providers, kwargs):
        stage = kwargs.pop("stage")
        result = await recommend_policy_funds("카페", stage, "서울", providers, **kwargs)
        assert result.error.code is ErrorCode.INVALID_INPUT


class TestLiveGrants:
    @pytest.mark.asyncio
    async def test_listings_added(self, full_providers, grants):
        grants.startup_grants = AsyncMock(return_value=[
            GrantListing(
                id="P1",
                title="2025 예비창업패키지",
                agency="창업진흥원",
                summary_html="<p>" + "가" * 300 + "</p>",
                application_window="20250301 ~ 20250331",
                url="https://www.bizinfo.go.kr/web/P1",
            ),
        ])

        result = await recommend_policy_funds("카페", "예비창업", "서울", full_providers, founder_type="청년")

        live = result.data.live_grants
        assert len(live) == 1
        assert live[0].application_period == "2025.03.01 ~ 2025.03.31"
        assert live[0].summary.endswith("...")
        assert len(live[0].summary) == 203
        assert "bizinfo" in result.meta["sources"]
        grants.startup_grants.assert_awaited_once_with(region="서울", founder_type="청년", limit=10)

    @pytest.mark.asyncio
    async def test_listing_failure_is_not_fatal(self, full_providers, grants):
        grants.startup_grants = AsyncMock(side_effect=RuntimeError("bizinfo down"))
        result = await recommend_policy_funds("카페", "예비창업", "서울", full_providers)
        assert result.success
        assert result.data.live_grants == []
        assert result.meta["sources"] == ["reference"]
