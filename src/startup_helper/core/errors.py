"""Typed failures raised inside the core and converted at the tool boundary."""

from __future__ import annotations

from typing import Optional

from .models import ErrorCode


class ToolError(Exception):
    """A failure with a stable code and a hint the user can act on."""

    def __init__(self, code: ErrorCode, message: str, suggestion: Optional[str] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion


class ProviderError(Exception):
    """An external data API answered, but not with usable data."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider


def location_not_found(location: str) -> ToolError:
    return ToolError(
        ErrorCode.LOCATION_NOT_FOUND,
        f"위치를 찾을 수 없습니다: {location}",
        suggestion="'강남역', '홍대입구', '서울시 마포구 서교동' 같은 지명이나 주소로 다시 시도해 주세요.",
    )
