"""Government funding recommendations.

Curated national programs are matched against the founder's profile;
open listings from Bizinfo are added when that source is configured.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..core import reference_data as ref
from ..core.clients.bizinfo import format_date_range, strip_html
from ..core.models import (
    DataSource,
    ErrorCode,
    GrantListing,
    InsightTag,
    LiveGrant,
    PolicyFund,
    PolicyFundRecommendation,
    ToolResult,
)
from ..core.providers import Providers
from ..core.reference import normalize_region
from . import tool_boundary

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 50
SUMMARY_LENGTH = 200


def _requires(fund: dict, text: str) -> bool:
    return any(text in r for r in fund["requirements"])


def fund_matches(
    fund: dict,
    stage: str,
    region: str,
    founder_type: Optional[str] = None,
    founder_age: Optional[int] = None,
) -> bool:
    """Apply the eligibility rules a program's requirements imply."""
    if _requires(fund, "39세 이하"):
        if founder_age is not None and founder_age > 39:
            return False
        if founder_type == "중장년":
            return False
    if _requires(fund, "40세 이상"):
        if founder_age is not None and founder_age < 40:
            return False
        if founder_type == "청년":
            return False
    if _requires(fund, "여성") and founder_type and founder_type != "여성":
        return False
    if _requires(fund, "서울") and not normalize_region(region).startswith("서울"):
        return False
    if _requires(fund, "폐업") and stage != "재창업":
        return False
    return True


def funding_tip(funds: list[PolicyFund], stage: str, founder_type: Optional[str]) -> InsightTag:
    if not funds:
        return InsightTag.TIP_NO_MATCH
    types = {f.type for f in funds}
    if stage == "예비창업" and types & {"복합", "멘토링"}:
        return InsightTag.TIP_MENTORING
    if {"보조금", "융자"} <= types:
        return InsightTag.TIP_GRANT_AND_LOAN
    if founder_type == "청년":
        return InsightTag.TIP_YOUTH_MULTI_APPLY
    return InsightTag.TIP_PREPARE_DOCUMENTS


def _live_grant(grant: GrantListing) -> LiveGrant:
    summary = strip_html(grant.summary_html)
    if len(summary) > SUMMARY_LENGTH:
        summary = summary[:SUMMARY_LENGTH] + "..."
    return LiveGrant(
        id=grant.id,
        title=grant.title,
        agency=grant.agency,
        summary=summary,
        application_period=format_date_range(grant.application_window),
        url=grant.url,
    )


@tool_boundary(ErrorCode.POLICY_FUND_FAILED, suggestion="기업마당(bizinfo.go.kr)에서 직접 검색해 보세요.")
async def recommend_policy_funds(
    business_type: str,
    stage: str,
    region: str,
    providers: Providers,
    founder_type: Optional[str] = None,
    founder_age: Optional[int] = None,
    page: int = 1,
    limit: int = 10,
) -> ToolResult:
    """Programs the founder is eligible for, paginated, with a next-step tip."""
    if stage not in ref.FUNDING_STAGES:
        raise ValueError(f"stage는 {', '.join(ref.FUNDING_STAGES)} 중 하나여야 합니다: {stage}")
    if founder_type is not None and founder_type not in ref.FOUNDER_TYPES:
        raise ValueError(f"founder_type은 {', '.join(ref.FOUNDER_TYPES)} 중 하나여야 합니다: {founder_type}")
    if page < 1 or not 1 <= limit <= MAX_PAGE_SIZE:
        raise ValueError(f"page는 1 이상, limit은 1~{MAX_PAGE_SIZE} 사이여야 합니다.")

    matched = [
        PolicyFund(**fund)
        for fund in ref.POLICY_FUNDS
        if fund_matches(fund, stage, region, founder_type, founder_age)
    ]
    start = (page - 1) * limit

    live_grants: list[LiveGrant] = []
    sources = [DataSource.REFERENCE]
    if providers.grants is not None:
        try:
            grants = await providers.grants.startup_grants(region=region, founder_type=founder_type, limit=limit)
            live_grants = [_live_grant(g) for g in grants]
            sources.append(DataSource.BIZINFO)
        except Exception as e:
            logger.warning("Bizinfo grant lookup failed: %s", e)

    recommendation = PolicyFundRecommendation(
        business_type=business_type,
        stage=stage,
        region=region,
        founder_type=founder_type,
        founder_age=founder_age,
        matched_funds=matched[start:start + limit],
        live_grants=live_grants,
        total_count=len(matched),
        page=page,
        tip=funding_tip(matched, stage, founder_type),
    )
    return ToolResult.ok(recommendation, sources)
