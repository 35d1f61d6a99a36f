"""Kahan compensated summation.

A running sum is paired with a carry term holding the rounding error of the
previous addition.  The carry is subtracted from the next addend before it is
folded into the sum, which keeps the accumulated error bounded independently
of the number of terms (a naive running sum drifts linearly with it).

Non-finite inputs are not detected; callers that care must check first.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, NamedTuple

__all__ = ["CompensatedAccumulator", "CompensatedSum", "accumulate", "compensated_sum"]


class CompensatedSum(NamedTuple):
    """Immutable ``(sum, carry)`` state of a compensated summation."""

    sum: float = 0.0
    carry: float = 0.0


def accumulate(state: CompensatedSum, value: float) -> CompensatedSum:
    """Return the state obtained by adding ``value`` to ``state``."""

    y = value - state.carry
    t = state.sum + y
    return CompensatedSum(sum=t, carry=(t - state.sum) - y)


@dataclass
class CompensatedAccumulator:
    """Mutable accumulator for tight loops.

    :meth:`add` repeats the arithmetic of :func:`accumulate` in place so the
    hot path does not allocate a new state per term.
    """

    sum: float = 0.0
    carry: float = 0.0

    def add(self, value: float) -> None:
        y = value - self.carry
        t = self.sum + y
        self.carry = (t - self.sum) - y
        self.sum = t

    def extend(self, values: Iterable[float]) -> None:
        for value in values:
            self.add(float(value))

    def state(self) -> CompensatedSum:
        return CompensatedSum(sum=self.sum, carry=self.carry)


def compensated_sum(values: Iterable[float]) -> float:
    """Sum ``values`` with Kahan compensation."""

    acc = CompensatedAccumulator()
    acc.extend(values)
    return acc.sum
