from __future__ import annotations

import pytest

from numerics.timing import measure, to_ms


def test_measure_returns_operation_result_unchanged():
    payload = {"scores": [0.25, 0.75]}
    result, elapsed = measure(lambda: payload)
    assert result is payload
    assert elapsed >= 0.0


def test_measure_forwards_arguments():
    result, elapsed = measure(pow, 2, 10, mod=1000)
    assert result == 24
    assert elapsed >= 0.0


def test_measure_propagates_exceptions():
    def boom() -> None:
        raise KeyError("missing")

    with pytest.raises(KeyError, match="missing"):
        measure(boom)


def test_to_ms():
    assert to_ms(0.5) == 500.0
    assert to_ms(0.0) == 0.0
