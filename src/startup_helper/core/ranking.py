"""Rank scored candidates and summarize a comparison."""

from __future__ import annotations

from typing import Iterable

from .errors import ToolError
from .models import CompositeScore, ComparisonSummary, ErrorCode, LocationTier, RankedEntity
from .scoring import location_tier


def rank(entities: Iterable[tuple[str, CompositeScore]]) -> list[RankedEntity]:
    """Sort by score, highest first. Ties keep their input order."""
    ranked = [
        RankedEntity(identity=identity, score=score.value, tier=location_tier(score.value))
        for identity, score in entities
    ]
    # sorted() is stable
    return sorted(ranked, key=lambda e: e.score, reverse=True)


def summarize(ranked: list[RankedEntity]) -> ComparisonSummary:
    recommended = [e.identity for e in ranked if e.tier is LocationTier.RECOMMENDED]
    return ComparisonSummary(
        best=ranked[0].identity,
        worst=ranked[-1].identity,
        recommended=recommended,
        no_recommended=not recommended,
    )


def rank_locations(entities: Iterable[tuple[str, CompositeScore]]) -> tuple[list[RankedEntity], ComparisonSummary]:
    """Rank analyzed locations.

    Raises:
        ToolError: NO_VALID_LOCATIONS when there is nothing to rank.
    """
    ranked = rank(entities)
    if not ranked:
        raise ToolError(
            ErrorCode.NO_VALID_LOCATIONS,
            "분석 가능한 위치가 없습니다.",
            suggestion="위치 이름을 확인하거나 '강남역', '홍대입구'처럼 더 구체적으로 입력해 주세요.",
        )
    return ranked, summarize(ranked)
