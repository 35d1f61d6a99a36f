"""Translate validated call arguments into the engine's graph and parameters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from contracts.validator import ValidatedCall


@dataclass(frozen=True)
class Graph:
    """Edge-list graph; edge ``i`` goes from ``heads[i]`` to ``tails[i]``.

    Vertex indices are not range-checked here; that is left to the engine.
    """

    num_vertices: int
    num_edges: int
    heads: np.ndarray
    tails: np.ndarray

    def __post_init__(self) -> None:
        if not (len(self.heads) == len(self.tails) == self.num_edges):
            raise ValueError("heads and tails must both hold num_edges entries")


@dataclass(frozen=True)
class SolverParams:
    """Engine parameters.

    ``u`` and ``v`` are ``None`` when the caller left them empty, which asks
    the engine for its default distribution.  An explicit all-zero vector is a
    different request and is kept as given.
    """

    alpha: float
    tol: float
    u: Optional[np.ndarray]
    v: Optional[np.ndarray]
    method: str


def build_graph(num_vs: int, heads: np.ndarray, tails: np.ndarray) -> Graph:
    return Graph(num_vertices=num_vs, num_edges=len(heads), heads=heads, tails=tails)


def _absent_if_empty(vector: Optional[np.ndarray]) -> Optional[np.ndarray]:
    if vector is None or len(vector) == 0:
        return None
    return vector


def build_params(
    alpha: float,
    tol: float,
    u: Optional[np.ndarray],
    v: Optional[np.ndarray],
    method: str,
) -> SolverParams:
    return SolverParams(
        alpha=alpha,
        tol=tol,
        u=_absent_if_empty(u),
        v=_absent_if_empty(v),
        method=method,
    )


def adapt(call: ValidatedCall) -> Tuple[Graph, SolverParams]:
    """Return the ``(graph, params)`` pair handed to the engine for ``call``."""

    graph = build_graph(call.num_vs, call.heads, call.tails)
    params = build_params(call.alpha, call.tol, call.u, call.v, call.method)
    return graph, params


__all__ = ["Graph", "SolverParams", "adapt", "build_graph", "build_params"]
