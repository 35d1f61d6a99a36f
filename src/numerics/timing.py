"""Wall-clock timing helpers."""

from __future__ import annotations

import time
from typing import Any, Callable, Tuple, TypeVar

__all__ = ["measure", "to_ms"]

T = TypeVar("T")


def measure(operation: Callable[..., T], *args: Any, **kwargs: Any) -> Tuple[T, float]:
    """Run ``operation`` once and return ``(result, elapsed_seconds)``.

    Exceptions raised by ``operation`` propagate untouched; no timing is
    reported for a failed run.
    """

    start = time.perf_counter()
    result = operation(*args, **kwargs)
    elapsed = time.perf_counter() - start
    return result, max(elapsed, 0.0)


def to_ms(seconds: float) -> float:
    return round(seconds * 1000, 3)
