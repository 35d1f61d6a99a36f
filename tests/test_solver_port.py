from __future__ import annotations

import numpy as np
import pytest

import project_config
from adapters.graph import build_graph, build_params
from ports.solver_port import EngineContractError, SolverGateway


class _Boom(RuntimeError):
    pass


def _inputs(n: int = 3):
    heads = np.arange(n, dtype=np.int64)
    tails = (heads + 1) % n
    return build_graph(n, heads, tails), build_params(0.85, 1e-10, None, None, "gs")


def test_gateway_invokes_engine_exactly_once():
    calls = []

    def engine(graph, params):
        calls.append((graph, params))
        return np.full(graph.num_vertices, 1.0 / graph.num_vertices)

    graph, params = _inputs()
    gateway = SolverGateway(engine, engine_id="stub")
    result = gateway.solve(graph, params)

    assert len(calls) == 1
    assert calls[0][0] is graph
    assert calls[0][1] is params
    assert result.engine_id == "stub"
    assert result.method == "gs"
    assert result.elapsed_s >= 0.0
    assert result.x is not None and result.x.tolist() == pytest.approx([1 / 3] * 3)

    with pytest.raises(RuntimeError, match="only be called once"):
        gateway.solve(graph, params)
    assert len(calls) == 1


def test_mapping_payload_carries_metrics():
    def engine(graph, params):
        return {"x": [0.2, 0.3, 0.5], "iterations": 7, "residual": 1e-12}

    graph, params = _inputs()
    result = SolverGateway(engine).solve(graph, params)
    assert result.metrics == {"iterations": 7, "residual": 1e-12}
    assert result.x is not None and result.x.tolist() == [0.2, 0.3, 0.5]


def test_engine_failures_propagate_unchanged():
    boom = _Boom("engine exploded")

    def engine(graph, params):
        raise boom

    graph, params = _inputs()
    with pytest.raises(_Boom) as excinfo:
        SolverGateway(engine).solve(graph, params)
    assert excinfo.value is boom


@pytest.mark.parametrize("payload", [[0.5, 0.5], {"scores": [1.0, 0.0, 0.0]}])
def test_malformed_payloads_break_the_contract(payload):
    graph, params = _inputs()
    with pytest.raises(EngineContractError):
        SolverGateway(lambda g, p: payload).solve(graph, params)


def test_release_drops_the_vector():
    graph, params = _inputs()
    result = SolverGateway(lambda g, p: [1.0, 0.0, 0.0]).solve(graph, params)
    assert not result.released
    result.release()
    assert result.released
    assert result.x is None


def test_from_config_loads_reference_engine():
    gateway = SolverGateway.from_config("dev", env={"PAGERANK_ENGINE_IMPL": "reference"})
    assert gateway.engine_id == "reference"

    graph, params = _inputs(4)
    result = gateway.solve(graph, params)
    assert result.x is not None and result.x.tolist() == pytest.approx([0.25] * 4)
    assert result.metrics["iterations"] >= 1


@pytest.fixture
def fresh_config():
    project_config.reload()
    yield
    project_config.reload()


def test_engine_receives_its_config_block(tmp_path, monkeypatch, fresh_config):
    config = tmp_path / "config.toml"
    config.write_text('[engine]\nimpl = "reference"\n\n[engine.reference]\nmax_iter = 1\n', encoding="utf-8")
    monkeypatch.setenv("PAGERANK_CONFIG_PATH", str(config))
    project_config.reload()

    gateway = SolverGateway.from_config("dev", env={})
    graph = build_graph(2, np.array([0], dtype=np.int64), np.array([1], dtype=np.int64))
    params = build_params(0.85, 1e-15, None, None, "gs")
    with pytest.raises(RuntimeError, match="in 1 iterations"):
        gateway.solve(graph, params)
