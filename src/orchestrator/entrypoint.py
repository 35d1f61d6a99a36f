"""Host-facing PageRank entrypoint (validate → adapt → solve → marshal).

Each call runs the phases strictly in order on the caller's thread and stops
at the first failure.  Argument errors surface as
:class:`~contracts.errors.CallAbortedError` with the host message; engine
errors propagate untouched.
"""

from __future__ import annotations

import hashlib
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from adapters.graph import adapt
from contracts.errors import CallAbortedError
from contracts.validator import validate_call
from feature_flags import is_call_log_enabled
from hostarray.marshaler import to_host_column
from numerics.timing import measure, to_ms
from ports._utils import build_env, choose_profile
from ports.solver_port import SolverGateway
from project_config import get_section

from . import log as call_log

_LOGGER = logging.getLogger(__name__)

EVENT_TYPE = "pagerank.call.v1"

EngineSpec = Union[None, SolverGateway, Callable[..., Any]]


@dataclass
class CallReport:
    """What happened during one call: phase timings, engine, outcome."""

    call_id: str
    profile: str
    status: str = "pending"
    engine: Optional[str] = None
    method: Optional[str] = None
    num_vs: Optional[int] = None
    num_es: Optional[int] = None
    timings_ms: Dict[str, float] = field(
        default_factory=lambda: {"validate": 0.0, "solve": 0.0, "marshal": 0.0}
    )
    metrics: Dict[str, Any] = field(default_factory=dict)
    error: Optional[Dict[str, str]] = None
    result_digest: Optional[str] = None

    def to_event(self) -> Dict[str, Any]:
        return {
            "type": EVENT_TYPE,
            "call_id": self.call_id,
            "profile": self.profile,
            "engine": self.engine,
            "method": self.method,
            "num_vs": self.num_vs,
            "num_es": self.num_es,
            "status": self.status,
            "error": dict(self.error) if self.error is not None else None,
            "timings_ms": dict(self.timings_ms),
            "result_digest": self.result_digest,
        }


def _new_call_id() -> str:
    return f"call-{uuid.uuid4().hex[:12]}"


def _digest(column: np.ndarray) -> str:
    return "sha256-" + hashlib.sha256(np.ascontiguousarray(column).tobytes()).hexdigest()


def _gateway(engine: EngineSpec, profile: str, env: Mapping[str, str]) -> SolverGateway:
    if engine is None:
        return SolverGateway.from_config(profile, env)
    if isinstance(engine, SolverGateway):
        return engine
    return SolverGateway(engine, engine_id=getattr(engine, "__name__", "custom"))


def _emit(report: CallReport, env: Mapping[str, str]) -> None:
    """Append the call event; a logging failure never changes the call outcome."""

    try:
        if not is_call_log_enabled(env, profile=report.profile):
            return
        if not call_log.is_configured():
            call_log.configure_from(get_section("call_log", default={}))
        path = call_log.append_event(report.to_event())
    except Exception:
        _LOGGER.warning("call %s could not be logged", report.call_id, exc_info=True)
        return
    _LOGGER.debug("call %s logged to %s", report.call_id, path)


def _run(
    args: Sequence[Any],
    nargout: int,
    engine: EngineSpec,
    profile: str | None,
    env: Mapping[str, str] | None,
) -> Tuple[np.ndarray, CallReport]:
    env_map = build_env(env)
    report = CallReport(call_id=_new_call_id(), profile=choose_profile(profile, env_map))

    try:
        validated, elapsed = measure(validate_call, args, nargout)
        report.timings_ms["validate"] = to_ms(elapsed)

        graph, params = adapt(validated)
        report.method = params.method
        report.num_vs = graph.num_vertices
        report.num_es = graph.num_edges

        gateway = _gateway(engine, report.profile, env_map)
        report.engine = gateway.engine_id
        result = gateway.solve(graph, params)
        try:
            report.timings_ms["solve"] = to_ms(result.elapsed_s)
            report.metrics = dict(result.metrics)
            column, elapsed = measure(to_host_column, result.x, graph.num_vertices)
            report.timings_ms["marshal"] = to_ms(elapsed)
        finally:
            result.release()
    except CallAbortedError as exc:
        report.status = "aborted"
        report.error = {"code": exc.code, "kind": exc.kind, "msg": str(exc)}
        _LOGGER.debug("call %s aborted: %s", report.call_id, exc.code)
        raise
    except Exception as exc:
        report.status = "failed"
        report.error = {"code": type(exc).__name__, "kind": "failure", "msg": str(exc)}
        _LOGGER.debug("call %s failed in engine %s: %r", report.call_id, report.engine, exc)
        raise
    else:
        report.status = "ok"
        report.result_digest = _digest(column)
        _LOGGER.debug(
            "call %s ok: validate=%.3fms solve=%.3fms marshal=%.3fms",
            report.call_id,
            report.timings_ms["validate"],
            report.timings_ms["solve"],
            report.timings_ms["marshal"],
        )
    finally:
        if report.status != "pending":
            _emit(report, env_map)
    return column, report


def pagerank_call(
    args: Sequence[Any],
    nargout: int = 1,
    *,
    engine: EngineSpec = None,
    profile: str | None = None,
    env: Mapping[str, str] | None = None,
) -> List[np.ndarray]:
    """Host-style call: positional ``args`` in, list of output arrays out."""

    column, _ = _run(args, nargout, engine, profile, env)
    return [column]


def pagerank_with_report(
    num_vs: Any,
    heads: Any,
    tails: Any,
    alpha: Any,
    tol: Any,
    u: Any = None,
    v: Any = None,
    method: Any = "gs",
    *,
    engine: EngineSpec = None,
    profile: str | None = None,
    env: Mapping[str, str] | None = None,
) -> Tuple[np.ndarray, CallReport]:
    """Like :func:`pagerank` but also return the :class:`CallReport`."""

    args = (num_vs, heads, tails, alpha, tol, u, v, method)
    return _run(args, 1, engine, profile, env)


def pagerank(
    num_vs: Any,
    heads: Any,
    tails: Any,
    alpha: Any,
    tol: Any,
    u: Any = None,
    v: Any = None,
    method: Any = "gs",
    *,
    engine: EngineSpec = None,
    profile: str | None = None,
    env: Mapping[str, str] | None = None,
) -> np.ndarray:
    """Return the ``(num_vs, 1)`` PageRank column for the given edge list.

    ``u``/``v`` left as ``None`` (or any empty double vector) select the
    engine's default distributions.
    """

    column, _ = pagerank_with_report(
        num_vs, heads, tails, alpha, tol, u, v, method, engine=engine, profile=profile, env=env
    )
    return column


__all__ = ["CallReport", "EVENT_TYPE", "pagerank", "pagerank_call", "pagerank_with_report"]
