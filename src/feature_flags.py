"""Call-log feature flag.

``config/features.toml`` holds a ``[call_log]`` table with an ``enabled``
switch and optional ``by_profile.<profile>`` tables.  The process environment
(or the CLI, through ``CLI_CALL_LOG_ENABLED``) has the last word.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older Python
    import tomli as tomllib  # type: ignore[import-untyped]

__all__ = ["CALL_LOG_OVERRIDES", "get_call_log_feature", "is_call_log_enabled", "reload"]

# Checked in order; the first recognised value wins.
CALL_LOG_OVERRIDES = (
    "CLI_CALL_LOG_ENABLED",
    "PAGERANK_CALL_LOG_ENABLED",
    "CALL_LOG_ENABLED",
)

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


def _features_path() -> Path:
    override = os.environ.get("PAGERANK_FEATURES_PATH")
    if override:
        return Path(override)
    return Path(__file__).resolve().parents[1] / "config" / "features.toml"


@lru_cache(maxsize=1)
def _call_log_table() -> dict[str, Any]:
    path = _features_path()
    if not path.exists():
        return {}
    with path.open("rb") as handle:
        table = tomllib.load(handle).get("call_log")
    return table if isinstance(table, dict) else {}


def reload() -> None:
    """Forget the cached feature file."""

    _call_log_table.cache_clear()


def _flag(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
    return None


def get_call_log_feature(profile: str | None = None) -> dict[str, Any]:
    """Return the ``[call_log]`` table with the profile's overrides applied."""

    table = _call_log_table()
    feature = {key: value for key, value in table.items() if key != "by_profile"}
    profiles = table.get("by_profile")
    if profile and isinstance(profiles, dict):
        block = profiles.get(profile.lower())
        if isinstance(block, dict):
            feature.update(block)
    return feature


def is_call_log_enabled(env: Mapping[str, str] | None = None, *, profile: str | None = None) -> bool:
    """Whether each call should append a ``pagerank.call.v1`` event."""

    if env:
        for key in CALL_LOG_OVERRIDES:
            override = _flag(env.get(key))
            if override is not None:
                return override
    return bool(get_call_log_feature(profile).get("enabled", False))
