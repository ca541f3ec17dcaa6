"""Floating population and demographic fit."""

from __future__ import annotations

import logging
from typing import Optional

from ..core import reference_data as ref
from ..core.estimator import estimate_population
from ..core.models import (
    AnalyzedLocation,
    AreaProfile,
    DataSource,
    ErrorCode,
    FitAnalysis,
    InsightTag,
    PopulationAnalysis,
    ToolResult,
)
from ..core.providers import Providers
from ..core.reference import get_business_fit, normalize_business_type
from ..core.scoring import fit_score, fit_tier
from . import tool_boundary

logger = logging.getLogger(__name__)


def _fit_analysis(business_key: str, profile: AreaProfile) -> Optional[FitAnalysis]:
    fit = get_business_fit(business_key)
    if fit is None:
        return None
    score = fit_score(profile, fit)
    return FitAnalysis(
        business_type=business_key,
        score=score,
        tier=fit_tier(score.value),
        target_age_groups=[ref.AGE_GROUP_LABELS[g] for g in fit.preferred_age_groups],
        peak_hours=list(profile.peak_hours),
    )


def population_insights(profile: AreaProfile, fit: Optional[FitAnalysis], live: bool) -> list[InsightTag]:
    pop = profile.population
    ages = profile.age_distribution
    times = profile.time_distribution
    insights = []

    if pop.working > pop.residential:
        insights.append(InsightTag.OFFICE_DOMINANT)
    elif pop.residential > pop.working * 2:
        insights.append(InsightTag.RESIDENTIAL_DOMINANT)
    if pop.floating > pop.total * 0.4:
        insights.append(InsightTag.HIGH_FLOATING_SHARE)

    if ages.teens + ages.twenties > 50:
        insights.append(InsightTag.YOUNG_SKEW)
    elif ages.thirties + ages.forties > 50:
        insights.append(InsightTag.PRIME_AGE_SKEW)

    if profile.gender_ratio.female > 55:
        insights.append(InsightTag.FEMALE_SKEW)
    elif profile.gender_ratio.male > 55:
        insights.append(InsightTag.MALE_SKEW)

    if times.lunch > 25:
        insights.append(InsightTag.LUNCH_PEAK)
    if times.evening > 30:
        insights.append(InsightTag.EVENING_PEAK)
    if times.night > 15:
        insights.append(InsightTag.LATE_NIGHT_TRAFFIC)

    if fit is not None:
        if fit.score.value >= 70:
            insights.append(InsightTag.STRONG_FIT)
        elif fit.score.value < 50:
            insights.append(InsightTag.WEAK_FIT)

    if live:
        insights.append(InsightTag.LIVE_REGISTRY_DATA)
    return insights


@tool_boundary(ErrorCode.ANALYSIS_FAILED)
async def analyze_population(
    location: str,
    providers: Providers,
    business_type: Optional[str] = None,
    radius: int = 500,
) -> ToolResult:
    """Population, time/age/gender mix and, for a known business type, a fit score."""
    estimate = await estimate_population(location, providers, radius)
    profile = estimate.profile

    fit = None
    if business_type:
        business_key = normalize_business_type(business_type)
        if business_key != ref.UNKNOWN_BUSINESS:
            fit = _fit_analysis(business_key, profile)
        else:
            logger.info("Skipping fit score for unknown business type %r", business_type)

    analysis = PopulationAnalysis(
        location=AnalyzedLocation(name=location, address=estimate.address, coordinates=profile.coordinates),
        area_type=profile.area_type,
        curated=estimate.curated,
        population=profile.population,
        time_distribution=profile.time_distribution,
        age_distribution=profile.age_distribution,
        gender_ratio=profile.gender_ratio,
        peak_hours=list(profile.peak_hours),
        characteristics=list(profile.characteristics),
        live=estimate.live,
        business_fit=fit,
        insights=population_insights(profile, fit, estimate.live is not None),
        confidence=estimate.confidence,
    )

    sources = [DataSource.REFERENCE]
    if not estimate.curated:
        sources.append(DataSource.KAKAO_LOCAL)
    if estimate.live is not None:
        sources.append(DataSource.SEMAS)
    return ToolResult.ok(analysis, sources)
