#!/usr/bin/env python3
"""Smoke-test deterministic behaviour of the PageRank adapter."""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from orchestrator.entrypoint import pagerank_with_report


def _ring_with_chords(num_vs: int) -> tuple[np.ndarray, np.ndarray]:
    heads = np.arange(num_vs, dtype=np.int64)
    tails = (heads + 1) % num_vs
    chord_heads = np.arange(0, num_vs, 3, dtype=np.int64)
    chord_tails = (chord_heads * 7 + 2) % num_vs
    return np.concatenate([heads, chord_heads]), np.concatenate([tails, chord_tails])


def _run(method: str) -> str:
    heads, tails = _ring_with_chords(64)
    _, report = pagerank_with_report(np.int64(64), heads, tails, 0.85, 1e-12, None, None, method)
    if report.result_digest is None:
        raise RuntimeError("call produced no result digest")
    return report.result_digest


def main() -> int:
    first = _run("gs")
    second = _run("gs")
    if first != second:
        print(f"determinism failed: {first} vs {second}")
        return 1

    print(f"determinism ok: {first}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
