"""Tests for normalization and reference lookups."""

import pytest

from startup_helper.core import reference_data as ref
from startup_helper.core.errors import ToolError
from startup_helper.core.models import AreaType, ErrorCode
from startup_helper.core.reference import (
    infer_area_type,
    is_franchise,
    normalize_business_type,
    normalize_location,
    normalize_region,
    place_search_term,
    require_business_type,
    search_keywords,
)


class TestBusinessType:
    @pytest.mark.parametrize("text,expected", [
        ("커피숍", "카페"),
        ("Coffee Shop", "카페"),
        ("스터디 카페", "스터디카페"),
        ("독서실", "스터디카페"),
        ("동네 치킨집", "치킨"),
        ("한식당", "음식점"),
        ("무인 아이스크림", "무인매장"),
    ])
    def test_patterns(self, text, expected):
        assert normalize_business_type(text) == expected

    def test_unknown(self):
        assert normalize_business_type("우주선 정비") == ref.UNKNOWN_BUSINESS
        assert normalize_business_type("") == ref.UNKNOWN_BUSINESS

    def test_idempotent(self):
        for key in ref.BUSINESS_TYPES:
            assert normalize_business_type(key) == key

    def test_require_lists_valid_types(self):
        with pytest.raises(ToolError) as exc_info:
            require_business_type("우주선 정비")
        assert exc_info.value.code is ErrorCode.UNKNOWN_BUSINESS_TYPE
        assert "카페" in exc_info.value.suggestion


class TestRegion:
    def test_specific_district_wins_over_city(self):
        assert normalize_region("서울 강남구") == "서울 강남"
        assert normalize_region("서울 종로구") == "서울"

    def test_default(self):
        assert normalize_region("") == ref.DEFAULT_REGION
        assert normalize_region(None) == ref.DEFAULT_REGION
        assert normalize_region("전라남도 순천시") == ref.DEFAULT_REGION

    def test_idempotent(self):
        for key in ref.REGIONAL_MULTIPLIERS:
            assert normalize_region(key) == key


class TestLocation:
    def test_alias_before_canonical_name(self):
        assert normalize_location("홍대") == "홍대입구"
        assert normalize_location("상수역 근처") == "홍대입구"
        assert normalize_location("강남구 역삼동") == "강남역"

    def test_canonical_names(self):
        for key in ref.AREA_PROFILES:
            assert normalize_location(key) == key

    def test_unknown(self):
        assert normalize_location("경상북도 어딘가") is None

    def test_infer_area_type(self):
        assert infer_area_type("신림역") is AreaType.STATION
        assert infer_area_type("한국대학교 앞") is AreaType.UNIVERSITY
        assert infer_area_type("래미안 아파트") is AreaType.RESIDENTIAL
        assert infer_area_type("xyz") is AreaType.MIXED


class TestProfiles:
    def test_distributions_sum_to_100(self):
        for profile in list(ref.AREA_PROFILES.values()) + list(ref.AREA_TYPE_PATTERNS.values()):
            assert sum(profile.time_distribution.model_dump().values()) == 100
            assert sum(profile.age_distribution.model_dump().values()) == 100
            assert profile.gender_ratio.male + profile.gender_ratio.female == 100

    def test_every_area_type_has_a_pattern(self):
        assert set(ref.AREA_TYPE_PATTERNS) == set(AreaType)

    def test_business_tables_cover_all_types(self):
        for key in ref.BUSINESS_TYPES:
            assert key in ref.BUSINESS_COST_PROFILES
            assert key in ref.BREAKEVEN_BENCHMARKS
            assert key in ref.REVENUE_BASELINES

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            ref.AREA_PROFILES["새 상권"] = None


class TestSearchHelpers:
    def test_place_search_term(self):
        assert place_search_term("치킨") == "치킨집"
        assert place_search_term(" 커피 ") == "카페"
        assert place_search_term("떡집") == "떡집"

    def test_place_search_term_single_character(self):
        assert place_search_term("빵") == "빵집"
        assert place_search_term("닭") == "치킨집"
        assert place_search_term("펫") == "펫샵"
        assert place_search_term("떡", "분식") == "분식집"
        assert place_search_term("떡", "베이커리") == "베이커리"
        assert place_search_term("떡") == "떡"
        assert place_search_term("떡", ref.UNKNOWN_BUSINESS) == "떡"

    def test_search_keywords_fallback(self):
        assert "커피" in search_keywords("카페", "카페")
        assert search_keywords(ref.UNKNOWN_BUSINESS, " 떡집 ") == ("떡집",)

    def test_franchise(self):
        assert is_franchise("스타벅스 강남점")
        assert not is_franchise("동네커피")
