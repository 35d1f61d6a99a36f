"""Gateway to the external PageRank engine.

A gateway wraps one engine handler and admits exactly one ``solve`` call.
Whatever the engine raises reaches the caller unchanged; the gateway only
checks that a successful run produced a vector covering every vertex.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional

import numpy as np

from adapters.graph import Graph, SolverParams
from numerics.timing import measure
from orchestrator.router import ResolvedEngine, resolve

from ._loader import load_module
from ._utils import build_env, choose_profile

_LOGGER = logging.getLogger(__name__)

EngineHandler = Callable[[Graph, SolverParams], Any]


class EngineContractError(RuntimeError):
    """Raised when an engine returns something other than a score vector."""


@dataclass
class SolverResult:
    """Output of a single engine run, owned by the call that produced it."""

    x: Optional[np.ndarray]
    engine_id: str
    method: str
    elapsed_s: float
    metrics: Dict[str, Any] = field(default_factory=dict)

    def release(self) -> None:
        self.x = None

    @property
    def released(self) -> bool:
        return self.x is None


def _split_payload(payload: Any) -> tuple[Any, Dict[str, Any]]:
    if isinstance(payload, Mapping):
        if "x" not in payload:
            raise EngineContractError("engine payload has no 'x' entry")
        metrics = {str(k): v for k, v in payload.items() if k != "x"}
        return payload["x"], metrics
    return payload, {}


class SolverGateway:
    """Single-use call boundary around an engine handler."""

    def __init__(self, handler: EngineHandler, *, engine_id: str = "custom") -> None:
        self._handler = handler
        self.engine_id = engine_id
        self._used = False

    @classmethod
    def from_config(
        cls,
        profile: str | None = None,
        env: Mapping[str, str] | None = None,
    ) -> "SolverGateway":
        """Build a gateway for the engine selected by configuration."""

        env_map = build_env(env)
        resolved = resolve(choose_profile(profile, env_map), env_map)
        return cls.from_resolved(resolved)

    @classmethod
    def from_resolved(cls, resolved: ResolvedEngine) -> "SolverGateway":
        module = load_module(resolved)
        try:
            handler = getattr(module, "port_solve")
        except AttributeError as exc:
            raise AttributeError(
                f"Engine '{resolved.module_id}' does not expose 'port_solve'"
            ) from exc
        handler = functools.partial(handler, options=dict(resolved.config))
        return cls(handler, engine_id=resolved.impl_id)

    @property
    def used(self) -> bool:
        return self._used

    def solve(self, graph: Graph, params: SolverParams) -> SolverResult:
        """Run the engine once and take ownership of its result vector."""

        if self._used:
            raise RuntimeError("SolverGateway.solve may only be called once")
        self._used = True

        payload, elapsed = measure(self._handler, graph, params)
        raw_x, metrics = _split_payload(payload)

        x = np.asarray(raw_x, dtype=np.float64).reshape(-1)
        if x.shape[0] != graph.num_vertices:
            raise EngineContractError(
                f"engine returned {x.shape[0]} scores for {graph.num_vertices} vertices"
            )

        _LOGGER.debug(
            "engine %s solved %d vertices / %d edges with %r in %.6fs",
            self.engine_id,
            graph.num_vertices,
            graph.num_edges,
            params.method,
            elapsed,
        )
        return SolverResult(
            x=x,
            engine_id=self.engine_id,
            method=params.method,
            elapsed_s=elapsed,
            metrics=metrics,
        )


__all__ = ["EngineContractError", "EngineHandler", "SolverGateway", "SolverResult"]
