"""JSONL call log.

Events go to ``<dir>/<YYYYMMDD>/calls_NN.jsonl``; a file that reaches
``max_bytes`` is closed and the next index is opened.
"""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping

__all__ = [
    "append_event",
    "configure",
    "configure_from",
    "current_log_path",
    "event_files",
    "is_configured",
    "read_events",
]

DEFAULT_DIR = "logs/calls"
_DEFAULT_MAX_BYTES = 100 * 1024 * 1024
_FILE_GLOB = "*/calls_*.jsonl"

_LOCK = threading.Lock()
_LOG_DIR = Path(DEFAULT_DIR)
_MAX_BYTES = _DEFAULT_MAX_BYTES
_CURRENT_PATH: Path | None = None
_CONFIGURED = False


def configure(base_dir: str | Path, *, max_bytes: int | None = None) -> None:
    """Send call events to ``base_dir``, rotating files at ``max_bytes``."""

    global _LOG_DIR, _MAX_BYTES, _CURRENT_PATH, _CONFIGURED
    _LOG_DIR = Path(base_dir)
    _MAX_BYTES = max_bytes or _DEFAULT_MAX_BYTES
    _CURRENT_PATH = None
    _CONFIGURED = True


def configure_from(settings: Mapping[str, Any]) -> None:
    """Configure from a ``[call_log]`` config block."""

    configure(settings.get("dir", DEFAULT_DIR), max_bytes=settings.get("max_bytes"))


def is_configured() -> bool:
    return _CONFIGURED


def _has_room(path: Path) -> bool:
    return not path.exists() or path.stat().st_size < _MAX_BYTES


def _active_file() -> Path:
    global _CURRENT_PATH
    day_dir = _LOG_DIR / datetime.now(timezone.utc).strftime("%Y%m%d")
    if _CURRENT_PATH is not None and _CURRENT_PATH.parent == day_dir and _has_room(_CURRENT_PATH):
        return _CURRENT_PATH

    day_dir.mkdir(parents=True, exist_ok=True)
    index = 0
    while not _has_room(day_dir / f"calls_{index:02d}.jsonl"):
        index += 1
    _CURRENT_PATH = day_dir / f"calls_{index:02d}.jsonl"
    return _CURRENT_PATH


def append_event(event: Mapping[str, Any]) -> Path:
    """Append one call event, stamping ``ts`` if absent; return the file written."""

    record: Dict[str, Any] = dict(event)
    record.setdefault("ts", datetime.now(timezone.utc).isoformat(timespec="milliseconds"))
    line = json.dumps(record, sort_keys=True, ensure_ascii=False)
    with _LOCK:
        path = _active_file()
        with path.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")
    return path


def current_log_path() -> Path | None:
    return _CURRENT_PATH


def event_files(base_dir: str | Path) -> List[Path]:
    """Call log files under ``base_dir`` in date then rotation order."""

    return sorted(Path(base_dir).glob(_FILE_GLOB))


def read_events(paths: Iterable[Path]) -> Iterator[Dict[str, Any]]:
    for path in paths:
        with path.open(encoding="utf-8") as handle:
            for line in handle:
                if line.strip():
                    yield json.loads(line)
