"""Startup Helper MCP Server.

FastMCP server with tools for Korean small-business founders: commercial
area analysis, competitors, population, costs, funding and trends.
Run: startup-helper-mcp
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from . import APP_NAME
from .core.cache import TTLCache
from .core.clients import BizinfoClient, KakaoLocalClient, SemasStoreClient
from .core.models import InsightTag, PaybackRating, ToolResult
from .core.providers import Providers
from .tools import commercial_area, competitors, costs, facilities, policy_funds, population, trends

logger = logging.getLogger(__name__)

READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=True)

TRANSPORTS = ("stdio", "sse", "streamable-http")

cache = TTLCache()


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Configure logging and report which data sources are enabled."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    for name in ("KAKAO_API_KEY", "SEMAS_API_KEY", "BIZINFO_API_KEY"):
        if not os.environ.get(name):
            logger.warning("%s is not set; the matching data source is disabled", name)
    try:
        yield
    finally:
        logger.info("Shutting down, cache stats: %s", cache.stats())
        cache.clear()


mcp = FastMCP(
    "Startup Helper",
    instructions="창업 준비를 돕는 도구입니다. 상권 분석, 경쟁업체, 유동인구, 창업 비용, 손익분기점, 매출 시뮬레이션, 임대료, 정책자금, 주변 시설, 업종 트렌드를 조회할 수 있습니다.",
    lifespan=lifespan,
)


def _timeout() -> float:
    raw = os.environ.get("REQUEST_TIMEOUT_SECONDS", "10")
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid REQUEST_TIMEOUT_SECONDS %r, using 10", raw)
        return 10.0


def _providers() -> Providers:
    """Build collaborators from the environment. Optional sources are None without a key."""
    timeout = _timeout()
    kakao = KakaoLocalClient(os.environ.get("KAKAO_API_KEY", ""), timeout=timeout, cache=cache)
    semas_key = os.environ.get("SEMAS_API_KEY", "")
    bizinfo_key = os.environ.get("BIZINFO_API_KEY", "")
    return Providers(
        geocoder=kakao,
        places=kakao,
        registry=SemasStoreClient(semas_key, timeout=timeout, cache=cache) if semas_key else None,
        grants=BizinfoClient(bizinfo_key, timeout=timeout, cache=cache) if bizinfo_key else None,
    )


# ─── Rendering ───────────────────────────────────────────────────────────────

INSIGHT_TEXT = {
    InsightTag.BUSY_FOOT_TRAFFIC: "유동인구가 많은 번화가입니다",
    InsightTag.CAFE_CLUSTER: "카페가 밀집해 있습니다",
    InsightTag.RESTAURANT_CLUSTER: "음식점이 밀집한 먹자상권입니다",
    InsightTag.GOOD_AMENITIES: "편의시설이 잘 갖춰져 있습니다",
    InsightTag.STATION_AREA: "역세권 상권입니다",
    InsightTag.STUDENT_AREA: "학생 수요가 많은 지역입니다",
    InsightTag.QUIET_RESIDENTIAL: "조용한 주거 상권입니다",
    InsightTag.LIVE_REGISTRY_DATA: "소상공인 상가정보 실데이터를 반영했습니다",
    InsightTag.NO_COMPETITION: "주변에 경쟁업체가 없습니다",
    InsightTag.FEW_COMPETITORS: "경쟁업체가 적어 진입 기회가 있습니다",
    InsightTag.FRANCHISE_DOMINANT: "프랜차이즈 비중이 높아 차별화가 필요합니다",
    InsightTag.INDEPENDENT_DOMINANT: "개인 매장 위주라 브랜드 경쟁력이 통할 수 있습니다",
    InsightTag.INTENSE_COMPETITION: "경쟁이 매우 치열합니다",
    InsightTag.BALANCED_COMPETITION: "프랜차이즈와 개인 매장이 고르게 분포합니다",
    InsightTag.FIRST_MOVER_OPPORTUNITY: "선점 효과를 노릴 수 있습니다",
    InsightTag.COMPETITION_SATURATED: "동종 업종이 포화 상태입니다",
    InsightTag.OFFICE_DOMINANT: "직장인 중심 상권입니다",
    InsightTag.RESIDENTIAL_DOMINANT: "거주민 중심 상권입니다",
    InsightTag.HIGH_FLOATING_SHARE: "유동인구 비중이 높습니다",
    InsightTag.YOUNG_SKEW: "10~20대 비중이 높습니다",
    InsightTag.PRIME_AGE_SKEW: "30~40대 비중이 높습니다",
    InsightTag.FEMALE_SKEW: "여성 비율이 높습니다",
    InsightTag.MALE_SKEW: "남성 비율이 높습니다",
    InsightTag.LUNCH_PEAK: "점심 시간대 유동이 많습니다",
    InsightTag.EVENING_PEAK: "저녁 시간대 유동이 많습니다",
    InsightTag.LATE_NIGHT_TRAFFIC: "심야 유동인구가 있습니다",
    InsightTag.STRONG_FIT: "업종과 상권 궁합이 좋습니다",
    InsightTag.WEAK_FIT: "업종과 상권 궁합이 약합니다",
    InsightTag.HARD_TO_REACH_BREAKEVEN: "손익분기 달성이 어려울 수 있습니다",
    InsightTag.LABOR_EXCEEDS_RENT: "인건비가 임대료보다 큽니다",
    InsightTag.LONG_PAYBACK: "투자금 회수 기간이 깁니다",
    InsightTag.PEAK_SEASON: "지금은 성수기입니다",
    InsightTag.OFF_SEASON: "지금은 비수기입니다",
    InsightTag.PREMIUM_DISTRICT: "임대료가 높은 프리미엄 상권입니다",
    InsightTag.MULTI_STAFF: "직원이 여러 명이라 인건비 관리가 중요합니다",
    InsightTag.SHORT_HOURS: "영업시간이 짧아 매출이 제한될 수 있습니다",
    InsightTag.GROUND_FLOOR: "1층이라 접근성이 좋지만 임대료가 높습니다",
    InsightTag.UPPER_FLOOR: "2층 이상이라 임대료는 낮지만 노출이 적습니다",
    InsightTag.BASEMENT: "지하층은 임대료가 낮지만 환기와 노출에 유의하세요",
    InsightTag.MEDIUM_STORE: "중형 매장입니다",
    InsightTag.SMALL_STORE: "소형 매장입니다",
    InsightTag.SUBWAY_NEARBY: "지하철역이 가깝습니다",
    InsightTag.NO_SUBWAY: "반경 내 지하철역이 없습니다",
    InsightTag.BUS_ACCESS: "버스 접근성이 좋습니다",
    InsightTag.PARKING_AVAILABLE: "주차가 편리합니다",
    InsightTag.PARKING_SHORTAGE: "주차 공간이 부족합니다",
    InsightTag.BANKING_ACCESS: "금융 시설이 가깝습니다",
    InsightTag.AMENITY_CLUSTER: "편의점이 많아 생활 편의성이 높습니다",
    InsightTag.ACCESSIBILITY_EXCELLENT: "접근성이 매우 우수합니다",
    InsightTag.ACCESSIBILITY_POOR: "접근성이 낮습니다",
    InsightTag.TIP_NO_MATCH: "조건에 맞는 정책자금이 없습니다. 기업마당에서 최신 공고를 확인해 보세요",
    InsightTag.TIP_MENTORING: "예비창업자는 교육과 멘토링이 포함된 사업부터 신청해 보세요",
    InsightTag.TIP_GRANT_AND_LOAN: "보조금과 융자를 함께 활용하면 자금 부담을 줄일 수 있습니다",
    InsightTag.TIP_YOUTH_MULTI_APPLY: "청년 창업자는 여러 사업에 중복 지원할 수 있는지 확인해 보세요",
    InsightTag.TIP_PREPARE_DOCUMENTS: "사업계획서와 증빙 서류를 미리 준비해 두세요",
    InsightTag.DENSE_DISTRICT: "상가가 밀집한 지역입니다",
    InsightTag.FOOD_DOMINANT: "음식업 비중이 가장 높습니다",
}


def _insight_text(tags) -> list[str]:
    return [INSIGHT_TEXT.get(InsightTag(t), str(t)) for t in tags]


def _manwon(value: float) -> str:
    """Format an amount in 만원 as 억/만원."""
    value = round(value)
    if value >= 10000:
        eok, rest = divmod(value, 10000)
        return f"{eok}억 {rest:,}만원" if rest else f"{eok}억원"
    return f"{value:,}만원"


def _envelope(result: ToolResult, summary_fn) -> dict:
    payload = result.model_dump(mode="json")
    if not result.success:
        error = result.error
        payload["summary"] = f"{error.message} ({error.suggestion})" if error.suggestion else error.message
        return payload
    payload["summary"] = summary_fn(result.data)
    payload["insights_text"] = _insight_text(getattr(result.data, "insights", []))
    return payload


# ─── Tool 1: Commercial Area ─────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def analyze_commercial_area(location: str, business_type: str, radius: int = 500) -> dict:
    """상권 분석: 주변 점포 밀도, 포화도, 상권 유형과 입지 점수.

    Args:
        location: 지명이나 주소. 예: '강남역', '홍대입구', '서울시 마포구 서교동'.
        business_type: 업종. 예: '카페', '치킨', '편의점'.
        radius: 분석 반경(m). 기본 500.
    """
    result = await commercial_area.analyze_commercial_area(location, business_type, _providers(), radius)
    return _envelope(result, _area_summary)


def _area_summary(a) -> str:
    density = a.density
    return (
        f"{a.location.name} 반경 {a.radius}m: {a.district_type.value}, 점포 {density.total_stores}개, "
        f"동종 {density.same_category_count}개, 포화도 {density.saturation_score}점 "
        f"({density.saturation_level.value}), 입지 점수 {a.location_score.value}점 ({a.tier.value})"
    )


# ─── Tool 2: Compare Areas ───────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def compare_commercial_areas(locations: list[str], business_type: str, radius: int = 500) -> dict:
    """여러 후보지를 같은 기준으로 분석해 순위를 매깁니다.

    Args:
        locations: 비교할 위치 목록(최대 10개).
        business_type: 업종.
        radius: 분석 반경(m). 기본 500.
    """
    result = await commercial_area.compare_commercial_areas(locations, business_type, _providers(), radius)
    return _envelope(result, _compare_summary)


def _compare_summary(c) -> str:
    ranking = " > ".join(f"{r.identity}({r.score})" for r in c.ranking)
    parts = [f"순위: {ranking}"]
    if c.summary.no_recommended:
        parts.append("추천 등급에 해당하는 후보지가 없습니다")
    else:
        parts.append(f"추천: {', '.join(c.summary.recommended)}")
    if c.failed:
        parts.append(f"분석 실패: {', '.join(c.failed)}")
    return " | ".join(parts)


# ─── Tool 3: Competitors ─────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def find_competitors(location: str, business_type: str, radius: int = 300, limit: int = 10) -> dict:
    """주변 경쟁업체 목록, 프랜차이즈 비율과 시장 공백.

    Args:
        location: 지명이나 주소.
        business_type: 업종.
        radius: 검색 반경(m). 기본 300.
        limit: 최대 업체 수. 기본 10.
    """
    result = await competitors.find_competitors(location, business_type, _providers(), radius, limit)
    return _envelope(result, _competitor_summary)


def _competitor_summary(c) -> str:
    return (
        f"{c.location} 반경 {c.radius}m {c.business_type} 경쟁업체 {c.total_count}개, "
        f"프랜차이즈 {c.franchise_ratio}%: {INSIGHT_TEXT[c.market_gap]}"
    )


# ─── Tool 4: Population ──────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def analyze_population(location: str, business_type: Optional[str] = None, radius: int = 500) -> dict:
    """유동인구, 시간대/연령/성별 분포와 업종 적합도.

    Args:
        location: 지명이나 주소.
        business_type: 업종(선택). 주면 상권 궁합 점수를 계산합니다.
        radius: 실데이터 조회 반경(m). 기본 500.
    """
    result = await population.analyze_population(location, _providers(), business_type, radius)
    return _envelope(result, _population_summary)


def _population_summary(p) -> str:
    parts = [
        f"{p.location.name} ({p.area_type.value}): 일 유동인구 약 {p.population.total:,}명",
        f"피크 {', '.join(p.peak_hours)}" if p.peak_hours else "",
    ]
    if p.business_fit is not None:
        parts.append(f"{p.business_fit.business_type} 적합도 {p.business_fit.score.value}점")
    parts.append(f"신뢰도 {p.confidence.value}")
    return " | ".join(part for part in parts if part)


# ─── Tool 5: Startup Cost ────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def calculate_startup_cost(
    business_type: str, region: str, size: float = 15, premium_level: str = "standard"
) -> dict:
    """창업 초기 비용: 보증금, 인테리어, 설비, 초도물품, 6개월 운영자금.

    Args:
        business_type: 업종.
        region: 지역. 예: '서울 강남', '부산'.
        size: 매장 평수. 기본 15.
        premium_level: 'basic', 'standard', 'premium' 중 하나.
    """
    result = await costs.calculate_startup_cost(business_type, region, size, premium_level)
    return _envelope(result, _cost_summary)


def _cost_summary(c) -> str:
    total = c.total_cost
    return (
        f"{c.region} {c.size:g}평 {c.business_type} 예상 창업비용 {_manwon(total.estimated)} "
        f"(범위 {_manwon(total.min)} ~ {_manwon(total.max)}), {c.regional_note}"
    )


# ─── Tool 6: Breakeven ───────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def analyze_breakeven(
    business_type: str,
    region: str,
    monthly_rent: Optional[int] = None,
    size: float = 15,
    average_price: Optional[int] = None,
) -> dict:
    """손익분기 매출, 하루 필요 고객 수, 시나리오별 이익과 투자 회수 기간.

    Args:
        business_type: 업종.
        region: 지역.
        monthly_rent: 월 임대료(만원). 없으면 지역 평균으로 추정.
        size: 매장 평수. 기본 15.
        average_price: 객단가(원). 없으면 업종 평균.
    """
    result = await costs.analyze_breakeven(business_type, region, _providers(), monthly_rent, size, average_price)
    return _envelope(result, _breakeven_summary)


def _breakeven_summary(b) -> str:
    bep = b.breakeven
    months = "회수 불가" if b.payback.rating is PaybackRating.UNREACHABLE else f"{b.payback.months}개월"
    return (
        f"월 고정비 {_manwon(b.fixed_monthly)}, 손익분기 월매출 {_manwon(bep.monthly_sales)} "
        f"(하루 {bep.daily_customers}명, {bep.achievability.value}), 투자 회수 {months}"
    )


# ─── Tool 7: Revenue Simulation ──────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def simulate_revenue(
    business_type: str, region: str, size: float = 15, staff_count: int = 1, operating_hours: float = 12
) -> dict:
    """예상 일/월/연 매출, 계절 변동과 예상 순이익.

    Args:
        business_type: 업종.
        region: 지역.
        size: 매장 평수. 기본 15.
        staff_count: 직원 수. 기본 1.
        operating_hours: 하루 영업시간. 기본 12.
    """
    result = await costs.simulate_revenue(business_type, region, size, staff_count, operating_hours)
    return _envelope(result, _revenue_summary)


def _revenue_summary(r) -> str:
    monthly = r.monthly_revenue
    return (
        f"예상 월매출 {_manwon(monthly.average)} ({_manwon(monthly.min)} ~ {_manwon(monthly.max)}), "
        f"월 순이익 약 {_manwon(r.monthly_profit)} (이익률 {r.profit_margin}%), 현재 {r.current_season}"
    )


# ─── Tool 8: Rent ────────────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def estimate_rent(location: str, size: float = 15, floor: str = "1층", building_type: str = "상가") -> dict:
    """보증금과 월 임대료 추정.

    Args:
        location: 지명이나 주소.
        size: 평수. 기본 15.
        floor: '1층', '2층', '3층이상', '지하1층'.
        building_type: '상가', '오피스텔', '주상복합', '단독건물'.
    """
    result = await costs.estimate_rent(location, _providers(), size, floor, building_type)
    return _envelope(result, _rent_summary)


def _rent_summary(r) -> str:
    return (
        f"{r.region} {r.floor} {r.size:g}평: 보증금 약 {_manwon(r.deposit.average)}, "
        f"월세 약 {_manwon(r.monthly_rent.average)} + 관리비 {_manwon(r.management_fee)} "
        f"(서울 평균 대비 {r.vs_seoul_percent}%)"
    )


# ─── Tool 9: Policy Funds ────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def recommend_policy_funds(
    business_type: str,
    stage: str,
    region: str,
    founder_type: Optional[str] = None,
    founder_age: Optional[int] = None,
    page: int = 1,
    limit: int = 10,
) -> dict:
    """창업자 조건에 맞는 정부 지원사업과 정책자금.

    Args:
        business_type: 업종.
        stage: '예비창업', '초기창업', '운영중', '재창업'.
        region: 지역.
        founder_type: '청년', '중장년', '여성', '장애인', '일반' (선택).
        founder_age: 대표자 나이 (선택).
        page: 페이지. 기본 1.
        limit: 페이지당 개수(최대 50). 기본 10.
    """
    result = await policy_funds.recommend_policy_funds(
        business_type, stage, region, _providers(), founder_type, founder_age, page, limit
    )
    return _envelope(result, _funds_summary)


def _funds_summary(r) -> str:
    names = ", ".join(f.name for f in r.matched_funds[:3])
    parts = [f"조건에 맞는 지원사업 {r.total_count}개" + (f" ({names} 등)" if names else "")]
    if r.live_grants:
        parts.append(f"진행 중 공고 {len(r.live_grants)}건")
    parts.append(INSIGHT_TEXT[r.tip])
    return " | ".join(parts)


# ─── Tool 10: Nearby Facilities ──────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def analyze_nearby_facilities(location: str, radius: int = 500, categories: Optional[list[str]] = None) -> dict:
    """주변 지하철역, 버스정류장, 주차장, 은행 등 시설과 접근성 점수.

    Args:
        location: 지명이나 주소.
        radius: 검색 반경(m). 기본 500.
        categories: 조회할 시설 종류(선택). 예: ['지하철역', '주차장'].
    """
    result = await facilities.analyze_nearby_facilities(location, _providers(), radius, categories)
    return _envelope(result, _facility_summary)


def _facility_summary(f) -> str:
    counts = ", ".join(f"{g.category} {g.count}" for g in f.facilities if not g.failed)
    return f"{f.location.name} 반경 {f.radius}m 접근성 {f.accessibility_score}점 ({f.accessibility.value}): {counts}"


# ─── Tool 11: Trends ─────────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def get_business_trends(
    region: Optional[str] = None, category: Optional[str] = None, budget: Optional[float] = None
) -> dict:
    """뜨는 업종과 지는 업종, 지역별 트렌드와 예산별 추천 업종.

    Args:
        region: 지역(선택). 예: '서울', '부산'.
        category: 관심 업종(선택).
        budget: 창업 예산(원, 선택).
    """
    result = await trends.get_business_trends(region, category, budget)
    return _envelope(result, _trends_summary)


def _trends_summary(t) -> str:
    rising = ", ".join(f"{b.name}(+{b.growth_rate:g}%)" for b in t.rising[:3])
    parts = [f"{t.period} {t.region} 성장 업종: {rising}"]
    if t.category_match is not None:
        parts.append(f"{t.category_match.name} 증감률 {t.category_match.growth_rate:+g}%")
    if t.budget_picks:
        parts.append(f"예산 추천: {', '.join(t.budget_picks)}")
    return " | ".join(parts)


@mcp.tool(annotations=READ_ONLY)
async def get_regional_market_status(district_code: str) -> dict:
    """행정동 단위 업종별 점포 현황 (소상공인 상가정보 API 필요).

    Args:
        district_code: 행정동 코드(10자리). 예: '1168064000'.
    """
    result = await trends.get_regional_market_status(district_code, _providers())
    return _envelope(result, _regional_summary)


def _regional_summary(s) -> str:
    top = ", ".join(f"{c.category} {c.count}" for c in s.top_categories[:3])
    return f"행정동 {s.district_code} 점포 {s.total_stores:,}개: {top}"


def main():
    """Entry point for the CLI command."""
    transport = os.environ.get("MCP_TRANSPORT", "stdio")
    if transport not in TRANSPORTS:
        raise SystemExit(f"MCP_TRANSPORT must be one of {', '.join(TRANSPORTS)}, got {transport!r}")
    logger.info("Starting %s over %s", APP_NAME, transport)
    mcp.run(transport=transport)


if __name__ == "__main__":
    main()
