"""Utility helpers for port facades."""

from __future__ import annotations

import os
from typing import Dict, Mapping

DEFAULT_PROFILE = "dev"


def build_env(overrides: Mapping[str, str] | None = None) -> Dict[str, str]:
    """Merge process environment with optional overrides."""

    env: Dict[str, str] = {str(k): str(v) for k, v in os.environ.items()}
    if overrides:
        env.update({str(k): str(v) for k, v in overrides.items()})
    return env


def choose_profile(profile: str | None, env: Mapping[str, str]) -> str:
    """Return ``profile`` or, when unset, ``PAGERANK_PROFILE`` or ``dev``."""

    if profile:
        return profile.lower()
    return (env.get("PAGERANK_PROFILE") or DEFAULT_PROFILE).lower()


__all__ = ["DEFAULT_PROFILE", "build_env", "choose_profile"]
