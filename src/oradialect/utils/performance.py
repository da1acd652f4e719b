"""
Slow statement threshold resolution.
"""

from __future__ import annotations

import os

SLOW_QUERY_ENV_VAR = "ORADIALECT_SLOW_QUERY_MS"


def resolve_slow_query_ms(*, default: int = 100, override: int | None = None) -> int:
    """
    Pick the slow statement threshold: explicit override, then environment, then default.
    """

    if override is not None:
        return max(int(override), 0)
    raw = os.getenv(SLOW_QUERY_ENV_VAR)
    if raw is None or not raw.strip():
        return default
    try:
        return max(int(raw), 0)
    except ValueError:
        return default
