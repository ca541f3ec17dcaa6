"""Normalization and lookup over the static reference tables."""

from __future__ import annotations

from typing import Iterable, Optional, TypeVar

from . import reference_data as ref
from .errors import ToolError
from .models import AreaProfile, AreaType, BusinessFit, ErrorCode

K = TypeVar("K")


def _fold(text: str) -> str:
    return "".join(text.split()).lower()


def match_first(text: str, pairs: Iterable[tuple[str, K]]) -> Optional[K]:
    """Return the key of the first pattern contained in ``text``.

    Both sides are compared with whitespace removed and case folded, so
    '스터디 카페' and 'Coffee' match their patterns. Declaration order decides.
    """
    folded = _fold(text or "")
    if not folded:
        return None
    for pattern, key in pairs:
        if _fold(pattern) in folded:
            return key
    return None


def normalize_business_type(text: str) -> str:
    """Map free text to a canonical business key, or ``UNKNOWN_BUSINESS``."""
    return match_first(text, ref.BUSINESS_TYPE_PATTERNS) or ref.UNKNOWN_BUSINESS


def normalize_region(text: Optional[str]) -> str:
    """Map free text to a cost region key, defaulting to ``DEFAULT_REGION``."""
    return match_first(text or "", ref.REGION_PATTERNS) or ref.DEFAULT_REGION


def normalize_location(text: str) -> Optional[str]:
    """Map a location name to a curated area key.

    Aliases are checked before canonical names, so '홍대' resolves to
    '홍대입구' rather than to whatever key happens to contain it.
    """
    key = match_first(text, ref.LOCATION_ALIASES)
    if key:
        return key
    return match_first(text, ((name, name) for name in ref.AREA_PROFILES))


def infer_area_type(text: str) -> AreaType:
    return match_first(text, ref.AREA_TYPE_KEYWORDS) or AreaType.MIXED


def valid_business_types() -> list[str]:
    return list(ref.BUSINESS_TYPES)


def require_business_type(text: str) -> str:
    """Normalize a business type for tools that cannot proceed without one."""
    key = normalize_business_type(text)
    if key == ref.UNKNOWN_BUSINESS:
        raise ToolError(
            ErrorCode.UNKNOWN_BUSINESS_TYPE,
            f"지원하지 않는 업종입니다: {text}",
            suggestion="지원 업종: " + ", ".join(ref.BUSINESS_TYPES),
        )
    return key


def get_area_profile(key: Optional[str]) -> Optional[AreaProfile]:
    if not key:
        return None
    return ref.AREA_PROFILES.get(key)


def get_area_pattern(area_type: AreaType) -> AreaProfile:
    return ref.AREA_TYPE_PATTERNS.get(area_type, ref.AREA_TYPE_PATTERNS[AreaType.MIXED])


def get_business_fit(key: str) -> Optional[BusinessFit]:
    return ref.BUSINESS_TARGET_FIT.get(key)


def search_keywords(business_key: str, raw: str) -> tuple[str, ...]:
    """Keywords used to pick same-category stores out of a registry listing."""
    return ref.BUSINESS_SEARCH_KEYWORDS.get(business_key, (raw.strip().lower(),))


def place_search_term(raw: str, business_key: Optional[str] = None) -> str:
    """Query text for place keyword search ('치킨' searches better as '치킨집').

    A term too short for the search API falls back to the business key's own
    term when the key is known.
    """
    raw = raw.strip()
    term = ref.PLACE_SEARCH_TERMS.get(raw, raw)
    if len(term) < ref.MIN_SEARCH_TERM_LENGTH and business_key and business_key != ref.UNKNOWN_BUSINESS:
        return ref.PLACE_SEARCH_TERMS.get(business_key, business_key)
    return term


def is_franchise(name: str) -> bool:
    upper = name.upper()
    return any(keyword.upper() in upper for keyword in ref.FRANCHISE_KEYWORDS)
