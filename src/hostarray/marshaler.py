"""Copy engine results into the host's output array format."""

from __future__ import annotations

from typing import Sequence

import numpy as np

__all__ = ["to_host_column"]


def to_host_column(vector: Sequence[float] | np.ndarray, num_vertices: int) -> np.ndarray:
    """Return a dense ``(num_vertices, 1)`` double column holding ``vector``.

    Entry ``i`` of the column is ``vector[i]``; values are copied as-is.
    """

    source = np.asarray(vector, dtype=np.float64).reshape(-1)
    if source.shape[0] < num_vertices:
        raise ValueError(
            f"result vector holds {source.shape[0]} entries, expected {num_vertices}"
        )
    column = np.empty((num_vertices, 1), dtype=np.float64)
    column[:, 0] = source[:num_vertices]
    return column
