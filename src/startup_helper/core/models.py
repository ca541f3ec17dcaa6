"""Pydantic models shared by the analysis tools, the scoring core and the clients.

Percentages are integers 0-100. Money is in 만원 (10,000 KRW) unless a
field says otherwise.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DataSource(str, Enum):
    """External data sources."""

    KAKAO_LOCAL = "kakao_local"
    SEMAS = "semas"
    BIZINFO = "bizinfo"
    REFERENCE = "reference"


class ConfidenceLevel(str, Enum):
    """How much of an estimate rests on live data."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class AreaType(str, Enum):
    """Commercial area archetypes used for demographic defaults."""

    STATION = "역세권"
    UNIVERSITY = "대학가"
    OFFICE = "오피스"
    RESIDENTIAL = "주거지역"
    TOURIST = "관광지"
    NIGHTLIFE = "유흥가"
    MIXED = "복합"


class GenderPreference(str, Enum):
    FEMALE = "여성"
    MALE = "남성"
    ANY = "무관"


class LocationTier(str, Enum):
    """Recommendation tier for a location score."""

    RECOMMENDED = "recommended"
    NEUTRAL = "neutral"
    NOT_RECOMMENDED = "not_recommended"


class FitTier(str, Enum):
    """Recommendation tier for a demographic fit score."""

    EXCELLENT = "excellent_fit"
    GOOD = "good_fit"
    MODERATE = "moderate_fit"
    POOR = "poor_fit"


class SaturationLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    SATURATED = "saturated"


class CompetitionLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    SATURATED = "saturated"


class DistrictType(str, Enum):
    """Shape of a commercial district inferred from category counts."""

    DEVELOPED = "발달상권"
    FOOD_ALLEY = "먹자골목"
    CAFE_STREET = "카페거리"
    SIDE_STREET = "골목상권"
    GENERAL = "일반상권"


class AccessibilityLevel(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class Achievability(str, Enum):
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"


class PaybackRating(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    AVERAGE = "average"
    POOR = "poor"
    UNREACHABLE = "unreachable"


class InsightTag(str, Enum):
    """Machine-checkable insight codes attached to analysis results."""

    # District characteristics
    BUSY_FOOT_TRAFFIC = "busy_foot_traffic"
    CAFE_CLUSTER = "cafe_cluster"
    RESTAURANT_CLUSTER = "restaurant_cluster"
    GOOD_AMENITIES = "good_amenities"
    STATION_AREA = "station_area"
    STUDENT_AREA = "student_area"
    QUIET_RESIDENTIAL = "quiet_residential"
    # Competition
    LIVE_REGISTRY_DATA = "live_registry_data"
    NO_COMPETITION = "no_competition"
    FEW_COMPETITORS = "few_competitors"
    FRANCHISE_DOMINANT = "franchise_dominant"
    INDEPENDENT_DOMINANT = "independent_dominant"
    INTENSE_COMPETITION = "intense_competition"
    BALANCED_COMPETITION = "balanced_competition"
    FIRST_MOVER_OPPORTUNITY = "first_mover_opportunity"
    COMPETITION_SATURATED = "competition_saturated"
    # Population
    OFFICE_DOMINANT = "office_dominant"
    RESIDENTIAL_DOMINANT = "residential_dominant"
    HIGH_FLOATING_SHARE = "high_floating_share"
    YOUNG_SKEW = "young_skew"
    PRIME_AGE_SKEW = "prime_age_skew"
    FEMALE_SKEW = "female_skew"
    MALE_SKEW = "male_skew"
    LUNCH_PEAK = "lunch_peak"
    EVENING_PEAK = "evening_peak"
    LATE_NIGHT_TRAFFIC = "late_night_traffic"
    STRONG_FIT = "strong_fit"
    WEAK_FIT = "weak_fit"
    # Costs and revenue
    HARD_TO_REACH_BREAKEVEN = "hard_to_reach_breakeven"
    LABOR_EXCEEDS_RENT = "labor_exceeds_rent"
    LONG_PAYBACK = "long_payback"
    PEAK_SEASON = "peak_season"
    OFF_SEASON = "off_season"
    PREMIUM_DISTRICT = "premium_district"
    MULTI_STAFF = "multi_staff"
    SHORT_HOURS = "short_hours"
    GROUND_FLOOR = "ground_floor"
    UPPER_FLOOR = "upper_floor"
    BASEMENT = "basement"
    MEDIUM_STORE = "medium_store"
    SMALL_STORE = "small_store"
    # Facilities
    SUBWAY_NEARBY = "subway_nearby"
    NO_SUBWAY = "no_subway"
    BUS_ACCESS = "bus_access"
    PARKING_AVAILABLE = "parking_available"
    PARKING_SHORTAGE = "parking_shortage"
    BANKING_ACCESS = "banking_access"
    AMENITY_CLUSTER = "amenity_cluster"
    ACCESSIBILITY_EXCELLENT = "accessibility_excellent"
    ACCESSIBILITY_POOR = "accessibility_poor"
    # Funding tips
    TIP_NO_MATCH = "tip_no_match"
    TIP_MENTORING = "tip_mentoring"
    TIP_GRANT_AND_LOAN = "tip_grant_and_loan"
    TIP_YOUTH_MULTI_APPLY = "tip_youth_multi_apply"
    TIP_PREPARE_DOCUMENTS = "tip_prepare_documents"
    # Regional market
    DENSE_DISTRICT = "dense_district"
    FOOD_DOMINANT = "food_dominant"


class ErrorCode(str, Enum):
    """Stable error codes forwarded verbatim by the tool surface."""

    LOCATION_NOT_FOUND = "LOCATION_NOT_FOUND"
    UNKNOWN_BUSINESS_TYPE = "UNKNOWN_BUSINESS_TYPE"
    NO_VALID_LOCATIONS = "NO_VALID_LOCATIONS"
    INVALID_INPUT = "INVALID_INPUT"
    API_UNAVAILABLE = "API_UNAVAILABLE"
    ANALYSIS_FAILED = "ANALYSIS_FAILED"
    COMPARISON_FAILED = "COMPARISON_FAILED"
    COMPETITOR_SEARCH_FAILED = "COMPETITOR_SEARCH_FAILED"
    CALCULATION_FAILED = "CALCULATION_FAILED"
    SIMULATION_FAILED = "SIMULATION_FAILED"
    ESTIMATE_FAILED = "ESTIMATE_FAILED"
    POLICY_FUND_FAILED = "POLICY_FUND_FAILED"
    TREND_FAILED = "TREND_FAILED"
    REGIONAL_STATS_FAILED = "REGIONAL_STATS_FAILED"


# ─── Collaborator payloads ───────────────────────────────────────────────────


class Coordinates(BaseModel):
    """WGS84 point."""

    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


class Place(BaseModel):
    """A place returned by keyword or category search."""

    id: str = ""
    name: str
    category: str = ""
    address: str = ""
    coordinates: Optional[Coordinates] = None
    distance: Optional[int] = Field(default=None, description="Meters from the search center")
    phone: Optional[str] = None
    url: Optional[str] = None


class StoreRecord(BaseModel):
    """One registered store with its three-level industry classification."""

    store_id: str = ""
    name: str = ""
    branch: str = ""
    large_category: str = ""
    large_code: str = ""
    medium_category: str = ""
    medium_code: str = ""
    small_category: str = ""
    road_address: str = ""
    lot_address: str = ""
    coordinates: Optional[Coordinates] = None

    @property
    def address(self) -> str:
        return self.road_address or self.lot_address

    @property
    def display_category(self) -> str:
        return self.medium_category or self.large_category or "기타"


class StoreListing(BaseModel):
    items: list[StoreRecord] = Field(default_factory=list)
    total_count: int = 0


class GrantListing(BaseModel):
    """An open government support program."""

    id: str
    title: str
    agency: str = ""
    summary_html: str = ""
    application_window: str = ""
    url: str = ""
    tags: list[str] = Field(default_factory=list)
    target_audience: str = ""


class CategoryCount(BaseModel):
    name: str
    count: int


# ─── Reference profiles ──────────────────────────────────────────────────────


class PopulationCounts(BaseModel):
    """Daily population split by segment."""

    model_config = ConfigDict(frozen=True)

    total: int
    residential: int
    working: int
    floating: int


class _Distribution(BaseModel):
    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _sums_to_100(self):
        total = sum(self.model_dump().values())
        if total != 100:
            raise ValueError(f"{type(self).__name__} must sum to 100, got {total}")
        return self


class TimeDistribution(_Distribution):
    """Share of daily traffic per time slot (%)."""

    morning: int  # 06-11
    lunch: int  # 11-14
    afternoon: int  # 14-18
    evening: int  # 18-22
    night: int  # 22-06


class AgeDistribution(_Distribution):
    teens: int
    twenties: int
    thirties: int
    forties: int
    fifty_plus: int


class GenderRatio(_Distribution):
    male: int
    female: int


class AreaProfile(BaseModel):
    """Demographic profile of a commercial area, curated or pattern-derived."""

    model_config = ConfigDict(frozen=True)

    name: str
    coordinates: Optional[Coordinates] = None
    population: PopulationCounts
    time_distribution: TimeDistribution
    age_distribution: AgeDistribution
    gender_ratio: GenderRatio
    peak_hours: tuple[str, ...] = ()
    characteristics: tuple[str, ...] = ()
    area_type: AreaType


class BusinessFit(BaseModel):
    """Target customer profile for a business type."""

    model_config = ConfigDict(frozen=True)

    preferred_age_groups: tuple[str, ...]
    preferred_gender: GenderPreference
    preferred_area_types: tuple[AreaType, ...]
    preferred_time_slots: tuple[str, ...]
    note: str = ""


class ValueRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: float
    max: float

    @model_validator(mode="after")
    def _ordered(self):
        if self.min > self.max:
            raise ValueError(f"range min {self.min} exceeds max {self.max}")
        return self

    @property
    def midpoint(self) -> float:
        return (self.min + self.max) / 2


# ─── Estimates and scores ────────────────────────────────────────────────────


class LiveObservation(BaseModel):
    """Store count around a point from the regional registry."""

    store_count: int
    top_categories: list[CategoryCount] = Field(default_factory=list)


class PopulationEstimate(BaseModel):
    location: str
    address: str = ""
    curated: bool = Field(description="A curated area profile matched the location")
    profile: AreaProfile
    live: Optional[LiveObservation] = None
    confidence: ConfidenceLevel


class CompetitorCountEstimate(BaseModel):
    """Same-category store count with where it came from."""

    count: int
    source: Optional[DataSource] = None
    confidence: ConfidenceLevel
    top_categories: list[CategoryCount] = Field(default_factory=list)


class CompetitionEstimate(BaseModel):
    count: int
    level: CompetitionLevel
    sales_multiplier: float
    top_categories: list[CategoryCount] = Field(default_factory=list)


class ScoreComponent(BaseModel):
    """One capped contribution to a composite score."""

    name: str
    raw_value: float
    contribution: float
    max_contribution: float

    @model_validator(mode="after")
    def _within_cap(self):
        if not 0 <= self.contribution <= self.max_contribution:
            raise ValueError(
                f"{self.name}: contribution {self.contribution} outside [0, {self.max_contribution}]"
            )
        return self


class CompositeScore(BaseModel):
    value: int = Field(ge=0, le=100)
    base: float = 0
    components: list[ScoreComponent] = Field(default_factory=list)


class RankedEntity(BaseModel):
    identity: str
    score: int
    tier: LocationTier


class ComparisonSummary(BaseModel):
    """Best, worst and recommended candidates of a ranked comparison."""

    best: str
    worst: str
    recommended: list[str] = Field(default_factory=list)
    no_recommended: bool = Field(description="No candidate reached the recommended tier")


# ─── Tool results ────────────────────────────────────────────────────────────


class AnalyzedLocation(BaseModel):
    name: str
    address: str = ""
    coordinates: Optional[Coordinates] = None


class DensityAnalysis(BaseModel):
    total_stores: int
    category_breakdown: dict[str, int]
    same_category_count: int
    same_category_source: Optional[DataSource] = None
    saturation_score: int = Field(ge=0, le=100)
    saturation_level: SaturationLevel


class CommercialAreaAnalysis(BaseModel):
    location: AnalyzedLocation
    business_type: str
    radius: int
    district_type: DistrictType
    characteristics: list[InsightTag]
    density: DensityAnalysis
    location_score: CompositeScore
    tier: LocationTier
    confidence: ConfidenceLevel


class CommercialAreaComparison(BaseModel):
    business_type: str
    requested: list[str]
    failed: list[str] = Field(default_factory=list)
    locations: list[CommercialAreaAnalysis]
    ranking: list[RankedEntity]
    summary: ComparisonSummary


class Competitor(BaseModel):
    name: str
    category: str = ""
    address: str = ""
    distance: Optional[int] = None
    phone: Optional[str] = None
    url: Optional[str] = None
    franchise: bool = False
    source: DataSource = DataSource.KAKAO_LOCAL


class CompetitorAnalysis(BaseModel):
    business_type: str
    location: str
    radius: int
    competitors: list[Competitor]
    total_count: int
    franchise_ratio: int = Field(ge=0, le=100, description="Percent of listed competitors that are franchises")
    market_gap: InsightTag
    top_categories: list[CategoryCount] = Field(default_factory=list)
    insights: list[InsightTag] = Field(default_factory=list)
    confidence: ConfidenceLevel


class FitAnalysis(BaseModel):
    business_type: str
    score: CompositeScore
    tier: FitTier
    target_age_groups: list[str]
    peak_hours: list[str]


class PopulationAnalysis(BaseModel):
    location: AnalyzedLocation
    area_type: AreaType
    curated: bool
    population: PopulationCounts
    time_distribution: TimeDistribution
    age_distribution: AgeDistribution
    gender_ratio: GenderRatio
    peak_hours: list[str]
    characteristics: list[str]
    live: Optional[LiveObservation] = None
    business_fit: Optional[FitAnalysis] = None
    insights: list[InsightTag] = Field(default_factory=list)
    confidence: ConfidenceLevel


class CostRange(BaseModel):
    min: int
    max: int
    estimated: int


class StartupCostBreakdown(BaseModel):
    deposit: int
    interior: int
    equipment: int
    initial_inventory: int
    operating_fund: int
    other: int


class StartupCostAnalysis(BaseModel):
    business_type: str
    region: str
    size: float
    premium_level: str
    total_cost: CostRange
    breakdown: StartupCostBreakdown
    regional_multiplier: float
    regional_note: str
    tips: list[str]


class FixedCosts(BaseModel):
    rent: int
    labor: int
    utilities: int
    other: int

    @property
    def total(self) -> int:
        return self.rent + self.labor + self.utilities + self.other


class BreakevenPoint(BaseModel):
    monthly_sales: int
    daily_sales: int
    daily_customers: int
    average_price: int = Field(description="Won per customer")
    achievability: Achievability


class Scenario(BaseModel):
    monthly_sales: int
    monthly_profit: int


class PaybackPeriod(BaseModel):
    investment: int
    months: int
    rating: PaybackRating


class BreakevenAnalysis(BaseModel):
    business_type: str
    region: str
    size: float
    fixed_monthly: int
    variable_ratio: float
    costs: FixedCosts
    breakeven: BreakevenPoint
    competition: Optional[CompetitionEstimate] = None
    scenarios: dict[str, Scenario]
    payback: PaybackPeriod
    insights: list[InsightTag] = Field(default_factory=list)
    confidence: ConfidenceLevel


class RevenueRange(BaseModel):
    min: int
    average: int
    max: int


class RevenueSimulation(BaseModel):
    business_type: str
    region: str
    size: float
    staff_count: int
    operating_hours: float
    daily_revenue: RevenueRange
    monthly_revenue: RevenueRange
    yearly_revenue: RevenueRange
    daily_customers: int
    average_price: int
    peak_hours: str
    peak_days: str
    seasonal_revenue: dict[str, int]
    current_season: str
    monthly_profit: int
    profit_margin: int = Field(description="Percent")
    insights: list[InsightTag] = Field(default_factory=list)


class RentEstimate(BaseModel):
    location: AnalyzedLocation
    region: str
    size: float
    floor: str
    building_type: str
    deposit: RevenueRange
    monthly_rent: RevenueRange
    management_fee: int
    total_monthly_cost: int
    vs_seoul_percent: int = Field(description="Regional base rent as a percent of the Seoul average")
    regional_note: str
    insights: list[InsightTag] = Field(default_factory=list)


class PolicyFund(BaseModel):
    id: str
    name: str
    organization: str
    amount: str
    type: str
    deadline: Optional[str] = None
    requirements: list[str]
    url: str
    description: str


class LiveGrant(BaseModel):
    id: str
    title: str
    agency: str
    summary: str
    application_period: str
    url: str


class PolicyFundRecommendation(BaseModel):
    business_type: str
    stage: str
    region: str
    founder_type: Optional[str] = None
    founder_age: Optional[int] = None
    matched_funds: list[PolicyFund]
    live_grants: list[LiveGrant] = Field(default_factory=list)
    total_count: int
    page: int
    tip: InsightTag


class Facility(BaseModel):
    name: str
    category: str
    address: str = ""
    distance: Optional[int] = None
    phone: Optional[str] = None


class FacilityGroup(BaseModel):
    category: str
    count: int
    items: list[Facility] = Field(default_factory=list)
    failed: bool = False


class NearbyFacilitiesAnalysis(BaseModel):
    location: AnalyzedLocation
    radius: int
    facilities: list[FacilityGroup]
    total_count: int
    accessibility_score: int
    accessibility: AccessibilityLevel
    insights: list[InsightTag] = Field(default_factory=list)


class TrendingBusiness(BaseModel):
    name: str
    growth_rate: float
    count: int
    note: str = ""


class BusinessTrends(BaseModel):
    period: str
    region: str
    matched_region: Optional[str] = None
    rising: list[TrendingBusiness]
    declining: list[TrendingBusiness]
    regional_trends: list[str] = Field(default_factory=list)
    top_industries: list[str] = Field(default_factory=list)
    category_match: Optional[TrendingBusiness] = None
    budget_picks: list[str] = Field(default_factory=list)
    highlights: list[str] = Field(default_factory=list)


class IndustryStat(BaseModel):
    category: str
    code: str = ""
    count: int
    subcategories: list[CategoryCount] = Field(default_factory=list)


class RegionalMarketStatus(BaseModel):
    district_code: str
    total_stores: int
    top_categories: list[IndustryStat]
    insights: list[InsightTag] = Field(default_factory=list)


# ─── Envelope ────────────────────────────────────────────────────────────────


class ToolErrorDetail(BaseModel):
    code: ErrorCode
    message: str
    suggestion: Optional[str] = None


class ToolResult(BaseModel):
    """Success/error envelope returned by every analysis tool."""

    success: bool
    data: Optional[Any] = None
    error: Optional[ToolErrorDetail] = None
    meta: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def ok(cls, data: BaseModel, sources: list[DataSource], **meta: Any) -> "ToolResult":
        meta = {
            "sources": [s.value for s in sources],
            "timestamp": datetime.now(timezone.utc).isoformat(),
            **meta,
        }
        return cls(success=True, data=data, meta=meta)

    @classmethod
    def failure(cls, code: ErrorCode, message: str, suggestion: Optional[str] = None) -> "ToolResult":
        return cls(success=False, error=ToolErrorDetail(code=code, message=message, suggestion=suggestion))
