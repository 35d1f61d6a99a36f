"""Aggregation helpers for JSONL call logs."""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping

from numerics.compensated import CompensatedAccumulator
from orchestrator.log import read_events

__all__ = ["aggregate"]

EVENT_TYPE = "pagerank.call.v1"


def aggregate(paths: Iterable[Path], *, top: int = 5) -> Dict[str, Any]:
    """Summarise call events: outcome counts, top error codes, solve time."""

    statuses: Counter[str] = Counter()
    errors: Counter[str] = Counter()
    engines: Counter[str] = Counter()
    solve_ms = CompensatedAccumulator()
    solved = 0
    total = 0
    for event in read_events(paths):
        if event.get("type") != EVENT_TYPE:
            continue
        total += 1
        statuses[str(event.get("status", "unknown"))] += 1
        if event.get("engine"):
            engines[str(event["engine"])] += 1
        error = event.get("error")
        if isinstance(error, Mapping):
            errors[str(error.get("code", "unknown"))] += 1
        if event.get("status") == "ok":
            solved += 1
            solve_ms.add(float(event.get("timings_ms", {}).get("solve", 0.0)))

    return {
        "total_events": total,
        "status": dict(sorted(statuses.items())),
        "engines": dict(sorted(engines.items())),
        "top_errors": errors.most_common(top),
        "mean_solve_ms": round(solve_ms.sum / solved, 3) if solved else None,
    }
