"""Tests for composite scores, tiers and ranking."""

import pytest

from startup_helper.core import reference_data as ref
from startup_helper.core.errors import ToolError
from startup_helper.core.models import (
    AccessibilityLevel,
    AgeDistribution,
    AreaProfile,
    AreaType,
    BusinessFit,
    CompositeScore,
    DistrictType,
    ErrorCode,
    FitTier,
    GenderPreference,
    GenderRatio,
    InsightTag,
    LocationTier,
    PopulationCounts,
    SaturationLevel,
    ScoreComponent,
    TimeDistribution,
)
from startup_helper.core.ranking import rank, rank_locations
from startup_helper.core.scoring import (
    accessibility_level,
    accessibility_score,
    classify_district,
    compose,
    district_characteristics,
    fit_score,
    fit_tier,
    location_score,
    location_tier,
    round_half_up,
    saturation_level,
    saturation_score,
)


def score(value):
    return CompositeScore(value=value)


def area(area_type=AreaType.MIXED, ages=(10, 20, 20, 30, 20), times=(20, 20, 20, 20, 20), gender=(50, 50)):
    return AreaProfile(
        name="테스트상권",
        population=PopulationCounts(total=10000, residential=2000, working=4000, floating=4000),
        time_distribution=TimeDistribution(**dict(zip(("morning", "lunch", "afternoon", "evening", "night"), times))),
        age_distribution=AgeDistribution(**dict(zip(("teens", "twenties", "thirties", "forties", "fifty_plus"), ages))),
        gender_ratio=GenderRatio(male=gender[0], female=gender[1]),
        area_type=area_type,
    )


def target(gender=GenderPreference.FEMALE, area_types=(AreaType.RESIDENTIAL,)):
    return BusinessFit(
        preferred_age_groups=("twenties", "thirties"),
        preferred_gender=gender,
        preferred_area_types=area_types,
        preferred_time_slots=("afternoon", "evening"),
    )


def contributions(result):
    return {c.name: c.contribution for c in result.components}


class TestRounding:
    @pytest.mark.parametrize("value,expected", [
        (0.5, 1),
        (2.5, 3),
        (12.5, 13),
        (62.5, 63),
        (2.4, 2),
        (99.6, 100),
    ])
    def test_halves_round_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_compose_rounds_half_up(self):
        result = compose([ScoreComponent(name="x", raw_value=0, contribution=12.5, max_contribution=20)])
        assert result.value == 13


class TestSaturation:
    def test_relative_to_optimal_count(self):
        assert saturation_score("카페", 5) == 50
        assert saturation_score("편의점", 5) == 100

    def test_half_ratio_rounds_up(self):
        # 5 / 8 and 1 / 8 of the optimal count land exactly on .5
        assert saturation_score("미용실", 5) == 63
        assert saturation_score("미용실", 1) == 13

    def test_capped(self):
        assert saturation_score("카페", 500) == 100

    def test_levels(self):
        assert saturation_level(80) is SaturationLevel.SATURATED
        assert saturation_level(60) is SaturationLevel.HIGH
        assert saturation_level(40) is SaturationLevel.MEDIUM
        assert saturation_level(39) is SaturationLevel.LOW


class TestLocationScore:
    def test_components_respect_caps(self):
        result = location_score(0, 5000, 0, {"음식점": 30, "카페": 12, "편의점": 5, "대형마트": 1})
        for component in result.components:
            assert 0 <= component.contribution <= component.max_contribution
        assert result.value == 40 + 25 + 20 + 12

    def test_bounds(self):
        worst = location_score(100, 0, 100, {})
        assert 0 <= worst.value <= 100
        assert worst.value == 0 + 5 + 5 + 0

    def test_monotonic_in_saturation(self):
        breakdown = {"음식점": 10, "카페": 5}
        values = [location_score(s, 300, 5, breakdown).value for s in range(0, 101, 10)]
        assert values == sorted(values, reverse=True)

    def test_more_competitors_score_strictly_lower(self):
        breakdown = {"음식점": 20, "카페": 10, "편의점": 3}

        def scored(same_category_count):
            saturation = saturation_score("카페", same_category_count)
            return location_score(saturation, 300, same_category_count, breakdown).value

        assert scored(25) < scored(5)
        values = [scored(n) for n in range(0, 41)]
        assert values == sorted(values, reverse=True)

    @pytest.mark.parametrize("total_stores,points", [
        (99, 5),
        (100, 10),
        (199, 10),
        (200, 15),
        (499, 15),
        (500, 20),
        (999, 20),
        (1000, 25),
    ])
    def test_activity_breakpoints(self, total_stores, points):
        result = location_score(50, total_stores, 5, {})
        assert contributions(result)["activity"] == points

    def test_activity_never_decreases_with_more_stores(self):
        points = [contributions(location_score(50, n, 5, {}))["activity"] for n in range(0, 1200, 50)]
        assert points == sorted(points)

    def test_component_rejects_overflow(self):
        with pytest.raises(ValueError):
            ScoreComponent(name="x", raw_value=1, contribution=41, max_contribution=40)

    @pytest.mark.parametrize("value,tier", [
        (100, LocationTier.RECOMMENDED),
        (70, LocationTier.RECOMMENDED),
        (69, LocationTier.NEUTRAL),
        (40, LocationTier.NEUTRAL),
        (39, LocationTier.NOT_RECOMMENDED),
        (0, LocationTier.NOT_RECOMMENDED),
    ])
    def test_tiers(self, value, tier):
        assert location_tier(value) is tier


class TestFitScore:
    def test_cafe_in_university_area(self):
        profile = ref.AREA_PROFILES["홍대입구"]
        fit = ref.BUSINESS_TARGET_FIT["카페"]
        result = fit_score(profile, fit)
        assert result.base == 50
        assert 50 <= result.value <= 100
        assert {c.name for c in result.components} == {"age", "gender", "area_type", "time"}

    def test_neutral_gender_share_outside_preferred_area(self):
        # twenties + thirties = 40% -> 16, afternoon + evening = 40% -> 8
        result = fit_score(area(gender=(50, 50)), target())
        parts = contributions(result)
        assert parts["gender"] == 0
        assert parts["area_type"] == 0
        assert parts["age"] == pytest.approx(16)
        assert parts["time"] == pytest.approx(8)
        assert result.value == 50 + 16 + 8

    def test_gender_bonus_above_half(self):
        result = fit_score(area(gender=(40, 60)), target())
        assert contributions(result)["gender"] == pytest.approx(5)

    def test_any_gender_is_flat_bonus(self):
        result = fit_score(area(gender=(90, 10)), target(gender=GenderPreference.ANY))
        assert contributions(result)["gender"] == 5

    def test_area_type_bonus(self):
        result = fit_score(area(area_type=AreaType.RESIDENTIAL), target())
        assert contributions(result)["area_type"] == 15

    def test_age_and_time_caps(self):
        profile = area(ages=(5, 45, 40, 5, 5), times=(5, 5, 45, 40, 5))
        parts = contributions(fit_score(profile, target()))
        assert parts["age"] == 20
        assert parts["time"] == 10

    def test_clamped_to_100(self):
        profile = area(area_type=AreaType.RESIDENTIAL, ages=(5, 45, 40, 5, 5), times=(5, 5, 45, 40, 5), gender=(0, 100))
        result = fit_score(profile, target())
        # 50 + 20 + 10 + 15 + 10
        assert result.value == 100

    def test_tiers(self):
        assert fit_tier(80) is FitTier.EXCELLENT
        assert fit_tier(60) is FitTier.GOOD
        assert fit_tier(40) is FitTier.MODERATE
        assert fit_tier(39) is FitTier.POOR


class TestDistrict:
    def test_classification(self):
        assert classify_district({"음식점": 40, "카페": 20}) is DistrictType.DEVELOPED
        assert classify_district({"음식점": 25, "카페": 5}) is DistrictType.FOOD_ALLEY
        assert classify_district({"음식점": 10, "카페": 15}) is DistrictType.CAFE_STREET
        assert classify_district({"음식점": 5}) is DistrictType.SIDE_STREET
        assert classify_district({"음식점": 15, "카페": 8}) is DistrictType.GENERAL

    def test_quiet_when_nothing_stands_out(self):
        assert district_characteristics({}, "어딘가") == [InsightTag.QUIET_RESIDENTIAL]
        assert InsightTag.STATION_AREA in district_characteristics({}, "강남역")


class TestAccessibility:
    def test_presence_and_per_item_points(self):
        counts = {"지하철역": 2, "버스정류장": 5, "주차장": 1, "편의점": 10, "은행": 1, "카페": 4}
        assert accessibility_score(counts) == 30 + 15 + 3 + 10 + 10 + 3

    def test_empty(self):
        assert accessibility_score({}) == 0
        assert accessibility_level(0) is AccessibilityLevel.POOR

    def test_capped_at_100(self):
        counts = {name: 10 for name, _ in ref.FACILITY_CATEGORIES}
        counts.update({"기타1": 5, "기타2": 5})
        assert accessibility_score(counts) <= 100


class TestRanking:
    def test_ties_keep_input_order(self):
        ranked = rank([("A", score(70)), ("B", score(70)), ("C", score(50))])
        assert [e.identity for e in ranked] == ["A", "B", "C"]

    def test_sorted_descending(self):
        ranked = rank([("A", score(30)), ("B", score(90)), ("C", score(50))])
        assert [e.identity for e in ranked] == ["B", "C", "A"]
        assert ranked[0].tier is LocationTier.RECOMMENDED

    def test_summary(self):
        _, summary = rank_locations([("A", score(75)), ("B", score(72)), ("C", score(20))])
        assert summary.best == "A"
        assert summary.worst == "C"
        assert summary.recommended == ["A", "B"]
        assert not summary.no_recommended

    def test_no_recommended_flag(self):
        _, summary = rank_locations([("A", score(50))])
        assert summary.best == summary.worst == "A"
        assert summary.no_recommended

    def test_empty_raises(self):
        with pytest.raises(ToolError) as exc_info:
            rank_locations([])
        assert exc_info.value.code is ErrorCode.NO_VALID_LOCATIONS
