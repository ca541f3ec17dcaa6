"""Money tools: startup cost, breakeven, revenue simulation and rent.

All amounts are 만원 except average prices, which are in 원. The business
type must be one of the known keys; an unknown type fails fast with
UNKNOWN_BUSINESS_TYPE instead of falling back to a generic profile.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Optional

from ..core import reference_data as ref
from ..core.estimator import estimate_competition
from ..core.models import (
    Achievability,
    AnalyzedLocation,
    BreakevenAnalysis,
    BreakevenPoint,
    CompetitionLevel,
    ConfidenceLevel,
    Coordinates,
    CostRange,
    DataSource,
    ErrorCode,
    FixedCosts,
    InsightTag,
    PaybackPeriod,
    PaybackRating,
    Place,
    RentEstimate,
    RevenueRange,
    RevenueSimulation,
    Scenario,
    StartupCostAnalysis,
    StartupCostBreakdown,
    ToolResult,
)
from ..core.providers import Providers
from ..core.reference import normalize_region, require_business_type
from ..core.scoring import round_half_up
from . import tool_boundary

logger = logging.getLogger(__name__)

COMPETITION_RADIUS = 500


def _require_positive(name: str, value: float) -> None:
    if value is None or value <= 0:
        raise ValueError(f"{name}은(는) 0보다 커야 합니다: {value}")


async def _try_resolve(providers: Providers, query: str) -> Optional[Place]:
    """Best-effort geocoding for tools that work without coordinates."""
    try:
        return await providers.geocoder.resolve(query)
    except Exception as e:
        logger.warning("Optional geocoding failed for %r: %s", query, e)
        return None


# ─── Startup cost ────────────────────────────────────────────────────────────


def compute_startup_cost(
    business_key: str,
    region: str,
    size: float = 15,
    premium_level: str = "standard",
) -> StartupCostAnalysis:
    if premium_level not in ref.PREMIUM_LEVELS:
        raise ValueError(f"premium_level은 {', '.join(ref.PREMIUM_LEVELS)} 중 하나여야 합니다: {premium_level}")
    _require_positive("size", size)

    profile = ref.BUSINESS_COST_PROFILES[business_key]
    region_key = normalize_region(region)
    regional = ref.REGIONAL_MULTIPLIERS[region_key]
    mult = regional["multiplier"]
    monthly = profile["monthly_operating"]

    interior = profile["interior"][premium_level] * size * mult
    deposit = profile["deposit"].midpoint * mult
    equipment = profile["equipment"].midpoint
    inventory = profile["inventory"].midpoint
    operating = monthly * mult * 6
    subtotal = deposit + interior + equipment + inventory + operating
    other = subtotal * 0.05

    low = (
        profile["deposit"].min * mult + interior * 0.8 + profile["equipment"].min
        + profile["inventory"].min + monthly * mult * 4 + other * 0.7
    )
    high = (
        profile["deposit"].max * mult + interior * 1.2 + profile["equipment"].max
        + profile["inventory"].max + monthly * mult * 8 + other * 1.3
    )

    return StartupCostAnalysis(
        business_type=business_key,
        region=region_key,
        size=size,
        premium_level=premium_level,
        total_cost=CostRange(min=round_half_up(low), max=round_half_up(high), estimated=round_half_up(subtotal + other)),
        breakdown=StartupCostBreakdown(
            deposit=round_half_up(deposit),
            interior=round_half_up(interior),
            equipment=round_half_up(equipment),
            initial_inventory=round_half_up(inventory),
            operating_fund=round_half_up(operating),
            other=round_half_up(other),
        ),
        regional_multiplier=mult,
        regional_note=regional["note"],
        tips=list(ref.COST_SAVING_TIPS.get(business_key, ())) + list(ref.COST_SAVING_TIPS["공통"]),
    )


@tool_boundary(ErrorCode.CALCULATION_FAILED)
async def calculate_startup_cost(
    business_type: str,
    region: str,
    size: float = 15,
    premium_level: str = "standard",
) -> ToolResult:
    """Initial investment broken into deposit, interior, equipment, inventory and six months of running costs."""
    business_key = require_business_type(business_type)
    return ToolResult.ok(compute_startup_cost(business_key, region, size, premium_level), [DataSource.REFERENCE])


# ─── Breakeven ───────────────────────────────────────────────────────────────


def achievability(daily_customers: int) -> Achievability:
    if daily_customers <= ref.ACHIEVABILITY_THRESHOLDS["easy"]:
        return Achievability.EASY
    if daily_customers <= ref.ACHIEVABILITY_THRESHOLDS["normal"]:
        return Achievability.NORMAL
    return Achievability.HARD


def payback(investment: int, monthly_profit: int) -> PaybackPeriod:
    if monthly_profit <= 0:
        return PaybackPeriod(
            investment=investment,
            months=ref.UNREACHABLE_PAYBACK_MONTHS,
            rating=PaybackRating.UNREACHABLE,
        )
    months = math.ceil(investment / monthly_profit)
    thresholds = ref.PAYBACK_THRESHOLDS
    if months <= thresholds["excellent"]:
        rating = PaybackRating.EXCELLENT
    elif months <= thresholds["good"]:
        rating = PaybackRating.GOOD
    elif months <= thresholds["average"]:
        rating = PaybackRating.AVERAGE
    else:
        rating = PaybackRating.POOR
    return PaybackPeriod(investment=investment, months=months, rating=rating)


def fixed_costs(business_key: str, region_key: str, size: float, monthly_rent: Optional[int]) -> FixedCosts:
    bench = ref.BREAKEVEN_BENCHMARKS[business_key]
    if monthly_rent is None:
        rent_mult = ref.RENT_MULTIPLIERS.get(region_key, ref.DEFAULT_RENT_MULTIPLIER)
        monthly_rent = round_half_up(bench["rent_per_pyeong"] * size * rent_mult)
    return FixedCosts(
        rent=monthly_rent,
        labor=bench["labor_per_person"] * bench["min_staff"],
        utilities=round_half_up(bench["utilities"] * size / 15),
        other=bench["other_fixed"],
    )


@tool_boundary(ErrorCode.ANALYSIS_FAILED)
async def analyze_breakeven(
    business_type: str,
    region: str,
    providers: Providers,
    monthly_rent: Optional[int] = None,
    size: float = 15,
    average_price: Optional[int] = None,
) -> ToolResult:
    """Monthly sales needed to cover fixed costs, scenarios and payback period.

    When the store registry is configured, local competition scales the
    scenario sales up or down.
    """
    business_key = require_business_type(business_type)
    _require_positive("size", size)
    if monthly_rent is not None and monthly_rent < 0:
        raise ValueError(f"monthly_rent는 0 이상이어야 합니다: {monthly_rent}")
    if average_price is not None:
        _require_positive("average_price", average_price)

    bench = ref.BREAKEVEN_BENCHMARKS[business_key]
    region_key = normalize_region(region)
    costs = fixed_costs(business_key, region_key, size, monthly_rent)
    fixed = costs.total
    variable_ratio = bench["variable_ratio"]
    price = average_price or bench["average_price"]

    bep_monthly = round_half_up(fixed / (1 - variable_ratio))
    bep_daily = round_half_up(bep_monthly / 30)
    daily_customers = round_half_up(bep_daily / price * 10000)
    point = BreakevenPoint(
        monthly_sales=bep_monthly,
        daily_sales=bep_daily,
        daily_customers=daily_customers,
        average_price=price,
        achievability=achievability(daily_customers),
    )

    competition = None
    if providers.registry is not None:
        place = await _try_resolve(providers, region)
        if place is not None and place.coordinates is not None:
            competition = await estimate_competition(business_key, place.coordinates, COMPETITION_RADIUS, providers.registry)
    sales_mult = competition.sales_multiplier if competition else 1.0

    scenarios = {}
    for name, mult in ref.SCENARIO_MULTIPLIERS.items():
        sales = round_half_up(bep_monthly * mult * sales_mult)
        variable = round_half_up(sales * variable_ratio)
        scenarios[name] = Scenario(monthly_sales=sales, monthly_profit=sales - variable - fixed)

    if business_key in ref.BUSINESS_COST_PROFILES:
        investment = compute_startup_cost(business_key, region, size).total_cost.estimated
    else:
        investment = fixed * 12
    period = payback(investment, scenarios["realistic"].monthly_profit)

    insights = []
    if competition is not None:
        insights.append(InsightTag.LIVE_REGISTRY_DATA)
        if competition.level is CompetitionLevel.SATURATED:
            insights.append(InsightTag.COMPETITION_SATURATED)
    if period.months > ref.PAYBACK_THRESHOLDS["average"]:
        insights.append(InsightTag.LONG_PAYBACK)
    if costs.labor > costs.rent:
        insights.append(InsightTag.LABOR_EXCEEDS_RENT)
    if point.achievability is Achievability.HARD:
        insights.append(InsightTag.HARD_TO_REACH_BREAKEVEN)

    analysis = BreakevenAnalysis(
        business_type=business_key,
        region=region_key,
        size=size,
        fixed_monthly=fixed,
        variable_ratio=variable_ratio,
        costs=costs,
        breakeven=point,
        competition=competition,
        scenarios=scenarios,
        payback=period,
        insights=insights,
        confidence=ConfidenceLevel.HIGH if competition else ConfidenceLevel.LOW,
    )
    sources = [DataSource.REFERENCE]
    if competition is not None:
        sources += [DataSource.KAKAO_LOCAL, DataSource.SEMAS]
    return ToolResult.ok(analysis, sources)


# ─── Revenue ─────────────────────────────────────────────────────────────────


def season_of(day: date) -> str:
    if 3 <= day.month <= 5:
        return "봄"
    if 6 <= day.month <= 8:
        return "여름"
    if 9 <= day.month <= 11:
        return "가을"
    return "겨울"


@tool_boundary(ErrorCode.SIMULATION_FAILED)
async def simulate_revenue(
    business_type: str,
    region: str,
    size: float = 15,
    staff_count: int = 1,
    operating_hours: float = 12,
    today: Optional[date] = None,
) -> ToolResult:
    """Daily, monthly and yearly revenue with seasonal swing and expected profit."""
    business_key = require_business_type(business_type)
    _require_positive("size", size)
    if staff_count < 1:
        raise ValueError(f"staff_count는 1 이상이어야 합니다: {staff_count}")
    if not 0 < operating_hours <= 24:
        raise ValueError(f"operating_hours는 0 초과 24 이하여야 합니다: {operating_hours}")

    base = ref.REVENUE_BASELINES[business_key]
    region_key = normalize_region(region)
    if region and region.strip():
        region_mult = ref.REGIONAL_MULTIPLIERS[region_key]["multiplier"]
    else:
        region_mult = ref.DEFAULT_REGION_REVENUE_MULTIPLIER

    size_mult = math.sqrt(size / 15)
    staff_mult = 1 + (staff_count - 1) * 0.3
    total_mult = region_mult * size_mult * staff_mult * (operating_hours / 12)

    daily = RevenueRange(
        min=round_half_up(base["min"] * total_mult),
        average=round_half_up(base["avg"] * total_mult),
        max=round_half_up(base["max"] * total_mult),
    )
    days = ref.BUSINESS_DAYS_PER_MONTH
    monthly = RevenueRange(min=daily.min * days, average=daily.average * days, max=daily.max * days)
    yearly = RevenueRange(min=monthly.min * 12, average=monthly.average * 12, max=monthly.max * 12)

    seasons = ref.SEASON_MULTIPLIERS.get(business_key, ref.DEFAULT_SEASON_MULTIPLIERS)
    seasonal = {season: round_half_up(monthly.average * seasons[season]) for season in ref.SEASONS}
    current = season_of(today or date.today())
    margin = ref.PROFIT_MARGINS.get(business_key, ref.DEFAULT_PROFIT_MARGIN)

    insights = []
    if seasons[current] > 1.0:
        insights.append(InsightTag.PEAK_SEASON)
    elif seasons[current] < 1.0:
        insights.append(InsightTag.OFF_SEASON)
    if "강남" in region_key or "홍대" in region_key:
        insights.append(InsightTag.PREMIUM_DISTRICT)
    if staff_count >= 2:
        insights.append(InsightTag.MULTI_STAFF)
    if operating_hours < 10:
        insights.append(InsightTag.SHORT_HOURS)

    simulation = RevenueSimulation(
        business_type=business_key,
        region=region_key,
        size=size,
        staff_count=staff_count,
        operating_hours=operating_hours,
        daily_revenue=daily,
        monthly_revenue=monthly,
        yearly_revenue=yearly,
        daily_customers=round_half_up(base["customers"] * size_mult * staff_mult),
        average_price=base["avg_price"],
        peak_hours=ref.PEAK_HOURS.get(business_key, ref.DEFAULT_PEAK_HOURS),
        peak_days=ref.WEEKEND_NIGHT_PEAK_DAYS if business_key in ref.WEEKEND_NIGHT_BUSINESSES else ref.DEFAULT_PEAK_DAYS,
        seasonal_revenue=seasonal,
        current_season=current,
        monthly_profit=round_half_up(monthly.average * margin),
        profit_margin=round_half_up(margin * 100),
        insights=insights,
    )
    return ToolResult.ok(simulation, [DataSource.REFERENCE])


# ─── Rent ────────────────────────────────────────────────────────────────────


def _management_fee(size: float, floor: str) -> int:
    if floor == "1층":
        adjust = 1.0
    elif floor == "지하1층":
        adjust = 1.2
    else:
        adjust = 0.9
    return round_half_up(size * ref.MANAGEMENT_FEE_PER_PYEONG * adjust)


def _spread(average: float) -> RevenueRange:
    average = round_half_up(average)
    return RevenueRange(min=round_half_up(average * 0.8), average=average, max=round_half_up(average * 1.2))


@tool_boundary(ErrorCode.ESTIMATE_FAILED)
async def estimate_rent(
    location: str,
    providers: Providers,
    size: float = 15,
    floor: str = "1층",
    building_type: str = "상가",
) -> ToolResult:
    """Deposit and monthly rent for a store, adjusted for floor and building type."""
    _require_positive("size", size)
    place = await _try_resolve(providers, location)
    coordinates: Optional[Coordinates] = place.coordinates if place else None

    region_key = normalize_region(location)
    if region_key == ref.DEFAULT_REGION and place is not None and place.address:
        region_key = normalize_region(place.address)

    base = ref.BASE_RENT_PER_PYEONG[region_key]
    mult = ref.FLOOR_MULTIPLIERS.get(floor, 1.0) * ref.BUILDING_TYPE_MULTIPLIERS.get(building_type, 1.0)
    deposit = _spread(base["deposit"] * size * mult)
    monthly = _spread(base["monthly"] * size * mult)
    fee = _management_fee(size, floor)

    insights = []
    if any(district in region_key for district in ("강남", "홍대", "명동")):
        insights.append(InsightTag.PREMIUM_DISTRICT)
    if floor == "1층":
        insights.append(InsightTag.GROUND_FLOOR)
    elif floor in ("2층", "3층이상"):
        insights.append(InsightTag.UPPER_FLOOR)
    elif floor == "지하1층":
        insights.append(InsightTag.BASEMENT)
    if size >= 20:
        insights.append(InsightTag.MEDIUM_STORE)
    elif size <= 10:
        insights.append(InsightTag.SMALL_STORE)

    estimate = RentEstimate(
        location=AnalyzedLocation(name=location, address=place.address if place else "", coordinates=coordinates),
        region=region_key,
        size=size,
        floor=floor,
        building_type=building_type,
        deposit=deposit,
        monthly_rent=monthly,
        management_fee=fee,
        total_monthly_cost=monthly.average + fee,
        vs_seoul_percent=round_half_up(base["monthly"] / ref.BASE_RENT_PER_PYEONG["서울"]["monthly"] * 100),
        regional_note=ref.REGIONAL_MULTIPLIERS[region_key]["note"],
        insights=insights,
    )
    sources = [DataSource.REFERENCE, DataSource.KAKAO_LOCAL] if coordinates else [DataSource.REFERENCE]
    return ToolResult.ok(estimate, sources)
