"""Reference PageRank engine.

Stand-in for the native solver: every supported method name is served by the
same power iteration.  ``u`` distributes the mass of dangling vertices and
``v`` is the teleport distribution; both default to uniform.  Dangling mass
and the L1 residual are accumulated with compensated summation.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import numpy as np

from numerics.compensated import compensated_sum

DESCRIPTOR = {
    "impl_id": "reference",
    "kind": "power_iteration",
}

KNOWN_METHODS = frozenset({"ge", "gs", "gserr", "sor", "sccgs", "sccgs_uv", "sorscc"})

_DEFAULT_MAX_ITER = 10000


def _max_iter(options: Optional[Dict[str, Any]]) -> int:
    return int((options or {}).get("max_iter", _DEFAULT_MAX_ITER))


def _distribution(vector: Optional[np.ndarray], n: int) -> np.ndarray:
    if vector is None:
        return np.full(n, 1.0 / n, dtype=np.float64)
    return np.asarray(vector, dtype=np.float64)


def _check_endpoints(indices: np.ndarray, n: int, label: str) -> None:
    if indices.size and (indices.min() < 0 or indices.max() >= n):
        raise ValueError(f"{label} contain vertex indices outside [0, {n})")


def port_solve(
    graph: Any,
    params: Any,
    *,
    options: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Run the power iteration; ``options`` is the ``[engine.reference]`` block."""

    if params.method not in KNOWN_METHODS:
        raise ValueError(f"Unknown method: {params.method!r}")

    n = graph.num_vertices
    heads = np.asarray(graph.heads, dtype=np.int64)
    tails = np.asarray(graph.tails, dtype=np.int64)
    _check_endpoints(heads, n, "heads")
    _check_endpoints(tails, n, "tails")

    alpha = params.alpha
    u = _distribution(params.u, n)
    v = _distribution(params.v, n)

    out_degree = np.bincount(heads, minlength=n).astype(np.float64)
    dangling = out_degree == 0
    inv_degree = np.zeros(n, dtype=np.float64)
    np.divide(1.0, out_degree, out=inv_degree, where=~dangling)
    edge_weight = inv_degree[heads]

    x = np.full(n, 1.0 / n, dtype=np.float64)
    max_iter = _max_iter(options)
    for iteration in range(1, max_iter + 1):
        flow = np.bincount(tails, weights=x[heads] * edge_weight, minlength=n)
        dangling_mass = compensated_sum(x[dangling])
        x_next = alpha * (flow + dangling_mass * u) + (1 - alpha) * v
        residual = compensated_sum(np.abs(x_next - x))
        x = x_next
        if residual < params.tol:
            return {
                "x": x,
                "iterations": iteration,
                "residual": residual,
                "num_es_touched": iteration * graph.num_edges,
            }

    raise RuntimeError(f"power iteration did not reach tol={params.tol} in {max_iter} iterations")


__all__ = ["DESCRIPTOR", "KNOWN_METHODS", "port_solve"]
