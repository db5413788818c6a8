"""Environment-driven settings for the simplification service.

Values are read from the process environment (``main`` loads a ``.env``
file next to it first):

    ``SIMPLIFY_LOG_LEVEL``            -- logging level name (default ``INFO``)
    ``SIMPLIFY_VIEWPORT_WIDTH``       -- default viewport width (1280)
    ``SIMPLIFY_VIEWPORT_HEIGHT``      -- default viewport height (720)
    ``SIMPLIFY_MAX_VISITS_PER_NODE``  -- per-node visit budget; unset or
                                         ``0`` disables the budget
    ``SIMPLIFY_MAX_HTML_BYTES``       -- request size cap (5 MB)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    viewport_width: int = 1280
    viewport_height: int = 720
    max_visits_per_node: Optional[int] = None
    max_html_bytes: int = 5_000_000

    @classmethod
    def from_env(cls) -> Settings:
        budget = _int_env("SIMPLIFY_MAX_VISITS_PER_NODE", 0)
        return cls(
            log_level=os.getenv("SIMPLIFY_LOG_LEVEL", "INFO").upper(),
            viewport_width=_int_env("SIMPLIFY_VIEWPORT_WIDTH", 1280),
            viewport_height=_int_env("SIMPLIFY_VIEWPORT_HEIGHT", 720),
            max_visits_per_node=budget or None,
            max_html_bytes=_int_env("SIMPLIFY_MAX_HTML_BYTES", 5_000_000),
        )
