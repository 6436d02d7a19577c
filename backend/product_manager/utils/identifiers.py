"""Identifier allocation for newly created products."""

from __future__ import annotations

import time
from collections.abc import Iterable


def current_millis() -> int:
    return time.time_ns() // 1_000_000


def allocate_product_id(existing: Iterable[int], now_ms: int | None = None) -> int:
    """Return a millisecond timestamp id that no existing product uses.

    Two creations inside the same millisecond (or a clock that moved
    backwards) get bumped past the largest id currently held.
    """
    candidate = current_millis() if now_ms is None else now_ms
    highest = max(existing, default=None)
    if highest is not None and candidate <= highest:
        candidate = highest + 1
    return candidate
