from __future__ import annotations

import numpy as np
import pytest

from hostarray.marshaler import to_host_column


def test_column_preserves_index_order_and_values():
    source = np.array([0.1, 0.2, 0.7])
    column = to_host_column(source, 3)

    assert column.shape == (3, 1)
    assert column.dtype == np.float64
    assert column[:, 0].tolist() == [0.1, 0.2, 0.7]


def test_column_is_an_independent_copy():
    source = np.array([1.0, 2.0])
    column = to_host_column(source, 2)
    source[0] = 99.0
    assert column[0, 0] == 1.0


def test_values_are_copied_without_transformation():
    column = to_host_column([float("nan"), -1.0, 5.0], 3)
    assert np.isnan(column[0, 0])
    assert column[1:, 0].tolist() == [-1.0, 5.0]


def test_short_vector_is_rejected():
    with pytest.raises(ValueError):
        to_host_column([0.5], 2)
