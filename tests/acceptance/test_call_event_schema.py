from __future__ import annotations

import importlib.util
import json
import sys
from pathlib import Path

import numpy as np
import pytest

from contracts.errors import CallAbortedError
from orchestrator import log as call_log
from orchestrator.entrypoint import pagerank_with_report


def _load_schema_check():
    root = Path(__file__).resolve().parents[2]
    spec = importlib.util.spec_from_file_location("schema_check", root / "tools" / "ci" / "schema_check.py")
    if spec is None or spec.loader is None:  # pragma: no cover
        raise RuntimeError("unable to load schema_check module")
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    spec.loader.exec_module(module)
    return module


schema_check = _load_schema_check()


def _record_calls(base_dir: Path, monkeypatch) -> Path:
    for name in ("_LOG_DIR", "_MAX_BYTES", "_CURRENT_PATH", "_CONFIGURED"):
        monkeypatch.setattr(call_log, name, getattr(call_log, name))
    call_log.configure(base_dir)

    heads = np.array([0, 1, 2, 2], dtype=np.int64)
    tails = np.array([1, 2, 0, 3], dtype=np.int64)
    env = {"CLI_CALL_LOG_ENABLED": "1"}
    pagerank_with_report(np.int64(4), heads, tails, 0.85, 1e-12, env=env)
    with pytest.raises(CallAbortedError):
        pagerank_with_report(np.int64(4), heads, tails, 0.85, -1.0, env=env)
    path = call_log.current_log_path()
    assert path is not None
    return path


def test_logged_events_match_schema(tmp_path, monkeypatch, capsys) -> None:
    events = _record_calls(tmp_path / "calls", monkeypatch)

    assert schema_check.main(["--events", str(events)]) == 0
    assert "Validated 2 events" in capsys.readouterr().out


def test_schema_check_flags_inconsistent_event(tmp_path, monkeypatch, capsys) -> None:
    events = _record_calls(tmp_path / "calls", monkeypatch)
    first = json.loads(events.read_text(encoding="utf-8").splitlines()[0])
    first["result_digest"] = None

    broken = tmp_path / "broken.jsonl"
    broken.write_text(json.dumps(first) + "\n", encoding="utf-8")

    assert schema_check.main(["--events", str(broken)]) == 1
    assert "event[0]" in capsys.readouterr().err
