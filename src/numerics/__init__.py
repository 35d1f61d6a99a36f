"""Numerical primitives shared by the adapter and the engines."""

from __future__ import annotations

from .compensated import CompensatedAccumulator, CompensatedSum, accumulate, compensated_sum
from .timing import measure, to_ms

__all__ = [
    "CompensatedAccumulator",
    "CompensatedSum",
    "accumulate",
    "compensated_sum",
    "measure",
    "to_ms",
]
