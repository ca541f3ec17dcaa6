"""Analysis tools.

Each tool takes plain parameters plus a ``Providers`` bundle and returns a
``ToolResult`` envelope. ``tool_boundary`` is the only place exceptions
become envelopes.
"""

from __future__ import annotations

import functools
import logging
from typing import Awaitable, Callable, Optional

from ..core.errors import ToolError
from ..core.models import ErrorCode, ToolResult

logger = logging.getLogger(__name__)


def tool_boundary(failure_code: ErrorCode, suggestion: Optional[str] = None):
    """Convert exceptions raised by a tool into a failure envelope.

    ``ToolError`` keeps its own code. ``ValueError`` from input validation
    becomes INVALID_INPUT. Anything else is logged and reported under
    ``failure_code`` with the original message.
    """

    def decorator(func: Callable[..., Awaitable[ToolResult]]) -> Callable[..., Awaitable[ToolResult]]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> ToolResult:
            try:
                return await func(*args, **kwargs)
            except ToolError as e:
                return ToolResult.failure(e.code, e.message, e.suggestion)
            except ValueError as e:
                return ToolResult.failure(ErrorCode.INVALID_INPUT, str(e), suggestion)
            except Exception as e:
                logger.error("%s failed: %s", func.__name__, e, exc_info=True)
                return ToolResult.failure(failure_code, str(e) or type(e).__name__, suggestion)

        return wrapper

    return decorator
