"""Command line front-end for the PageRank adapter."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Tuple

import numpy as np

from contracts.errors import CallAbortedError
from orchestrator import log as call_log
from orchestrator.entrypoint import pagerank_with_report
from tools.reports import call_report


def _read_edges(path: Path) -> Tuple[np.ndarray, np.ndarray]:
    heads: List[int] = []
    tails: List[int] = []
    for line_no, line in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
        value = line.split("#", 1)[0].strip()
        if not value:
            continue
        parts = value.split()
        if len(parts) != 2:
            raise SystemExit(f"{path}:{line_no}: expected 'head tail', got {line!r}")
        try:
            heads.append(int(parts[0]))
            tails.append(int(parts[1]))
        except ValueError:
            raise SystemExit(f"{path}:{line_no}: vertex indices must be integers")
    return np.asarray(heads, dtype=np.int64), np.asarray(tails, dtype=np.int64)


def _read_vector(path: Path | None) -> np.ndarray | None:
    if path is None:
        return None
    values: List[float] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        value = line.split("#", 1)[0].strip()
        if value:
            values.append(float(value))
    return np.asarray(values, dtype=np.float64)


def _build_env(args: argparse.Namespace) -> Dict[str, str]:
    env: Dict[str, str] = {}
    if args.engine:
        env["CLI_PAGERANK_ENGINE_IMPL"] = args.engine
    if args.log_calls is True:
        env["CLI_CALL_LOG_ENABLED"] = "1"
    elif args.log_calls is False:
        env["CLI_CALL_LOG_ENABLED"] = "0"
    return env


def _json_default(value: Any) -> Any:
    if isinstance(value, np.generic):
        return value.item()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def cmd_run(args: argparse.Namespace) -> int:
    heads, tails = _read_edges(Path(args.edges))
    if args.num_vs is not None:
        num_vs = args.num_vs
    else:
        num_vs = int(max(heads.max(initial=-1), tails.max(initial=-1))) + 1
    try:
        scores, report = pagerank_with_report(
            np.int64(num_vs),
            heads,
            tails,
            args.alpha,
            args.tol,
            _read_vector(args.u),
            _read_vector(args.v),
            args.method,
            profile=args.profile,
            env=_build_env(args),
        )
    except CallAbortedError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    payload = {
        "scores": scores[:, 0].tolist(),
        "report": {**report.to_event(), "metrics": report.metrics},
    }
    print(json.dumps(payload, indent=2, sort_keys=True, default=_json_default))
    return 0


def cmd_report_calls(args: argparse.Namespace) -> int:
    base_dir = Path(args.path)
    files = call_log.event_files(base_dir)
    if not files:
        raise SystemExit(f"No JSONL logs found under {base_dir}")
    summary = call_report.aggregate(files, top=args.top)
    print(json.dumps(summary, indent=2, sort_keys=True))
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="PageRank over an edge list")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Compute PageRank for an edge list file")
    run.add_argument("edges", type=Path, help="File with one 'head tail' pair per line")
    run.add_argument("--num-vs", type=int, default=None, help="Vertex count (default: max index + 1)")
    run.add_argument("--alpha", type=float, default=0.85)
    run.add_argument("--tol", type=float, default=1e-10)
    run.add_argument("--method", default="gs")
    run.add_argument("--u", type=Path, default=None, help="Dangling distribution, one value per line")
    run.add_argument("--v", type=Path, default=None, help="Teleport distribution, one value per line")
    run.add_argument("--profile", default=None)
    run.add_argument("--engine", default=None, help="Override the configured engine implementation")
    run.add_argument(
        "--log-calls",
        dest="log_calls",
        action="store_true",
        default=None,
        help="Append a JSONL call event",
    )
    run.add_argument("--no-log-calls", dest="log_calls", action="store_false")
    run.set_defaults(func=cmd_run)

    report = sub.add_parser("report-calls", help="Aggregate JSONL call logs")
    report.add_argument("path", help="Directory containing JSONL logs")
    report.add_argument("--top", type=int, default=5)
    report.set_defaults(func=cmd_report_calls)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
