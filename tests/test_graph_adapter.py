from __future__ import annotations

import numpy as np
import pytest

from adapters.graph import Graph, adapt, build_graph, build_params
from contracts.validator import validate_call


def _validated(u, v):
    heads = np.array([0, 1, 2], dtype=np.int64)
    tails = np.array([1, 2, 0], dtype=np.int64)
    return heads, validate_call([np.int64(3), heads, tails, 0.9, 1e-8, u, v, "gs"])


def test_empty_vectors_become_absent_and_zeros_stay_explicit():
    _, call = _validated(np.empty(0), np.zeros(3))
    graph, params = adapt(call)

    assert params.u is None
    assert params.v is not None
    assert params.v.tolist() == [0.0, 0.0, 0.0]
    assert params.alpha == 0.9
    assert params.tol == 1e-8
    assert params.method == "gs"
    assert graph.num_vertices == 3
    assert graph.num_edges == 3


def test_graph_borrows_host_index_storage():
    heads, call = _validated(None, None)
    graph, _ = adapt(call)

    assert np.shares_memory(graph.heads, heads)
    assert not graph.heads.flags.writeable
    assert not graph.tails.flags.writeable


def test_build_params_maps_zero_length_to_absent():
    params = build_params(0.5, 1e-6, np.empty(0), np.array([0.5, 0.5]), "sor")
    assert params.u is None
    assert params.v is not None and params.v.tolist() == [0.5, 0.5]


def test_build_graph_counts_edges():
    graph = build_graph(5, np.array([0, 4]), np.array([4, 0]))
    assert graph.num_edges == 2
    assert graph.num_vertices == 5


def test_graph_rejects_mismatched_edge_arrays():
    with pytest.raises(ValueError):
        Graph(num_vertices=2, num_edges=2, heads=np.array([0, 1]), tails=np.array([1]))
