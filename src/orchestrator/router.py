"""Engine resolution router.

The engine implementation is chosen from ``config.toml`` and may be
overridden through the environment (``PAGERANK_ENGINE_IMPL``) and then the CLI
(``CLI_PAGERANK_ENGINE_IMPL``).  Implementations live in
``src/engines/<impl>/__init__.py`` and expose
``port_solve(graph, params, *, options)``; ``options`` is the
``[engine.<impl>]`` config block.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping

from project_config import get_config

ENGINES_ROOT = Path(__file__).resolve().parents[1] / "engines"

_LOGGER = logging.getLogger(__name__)
_DEF_IMPL = "reference"


class RouterError(RuntimeError):
    """Raised when an engine resolution request cannot be satisfied."""


@dataclass(frozen=True)
class ResolvedEngine:
    """Description of the engine chosen for a call."""

    impl_id: str
    module_id: str
    module_path: Path
    profile: str
    decision_source: str
    allow_fallback: bool
    fallback_used: bool
    config: Dict[str, Any]


def _normalise_env(env: Mapping[str, str]) -> Dict[str, str]:
    return {str(k).upper(): str(v) for k, v in env.items()}


def _extract_policy(profile: str) -> Dict[str, Any]:
    config = get_config()
    engine_cfg = config.get("engine", {})

    policy: Dict[str, Any] = {}
    if isinstance(engine_cfg, dict):
        for key, value in engine_cfg.items():
            if key == "by_profile" or isinstance(value, dict):
                continue
            policy[key] = value

        by_profile = engine_cfg.get("by_profile")
        if isinstance(by_profile, dict):
            profile_block = by_profile.get(profile)
            if isinstance(profile_block, dict):
                policy.update(profile_block)
    policy.setdefault("impl", _DEF_IMPL)
    policy.setdefault("allow_fallback", True)
    return policy


def _resolve_impl(policy: Mapping[str, Any], env: Mapping[str, str]) -> tuple[str, str]:
    impl = str(policy["impl"])
    decision_source = "config"

    if env.get("PAGERANK_ENGINE_IMPL"):
        impl = env["PAGERANK_ENGINE_IMPL"]
        decision_source = "env"
    if env.get("CLI_PAGERANK_ENGINE_IMPL"):
        impl = env["CLI_PAGERANK_ENGINE_IMPL"]
        decision_source = "cli"

    return impl, decision_source


def _engine_settings(impl: str) -> Dict[str, Any]:
    engine_cfg = get_config().get("engine", {})
    block = engine_cfg.get(impl) if isinstance(engine_cfg, dict) else None
    return dict(block) if isinstance(block, dict) else {}


def resolve(profile: str, env: Mapping[str, str]) -> ResolvedEngine:
    """Pick the engine implementation for ``profile`` under ``env``."""

    env_map = _normalise_env(env)
    policy = _extract_policy(profile.lower())
    impl, decision_source = _resolve_impl(policy, env_map)
    allow_fallback = bool(policy.get("allow_fallback", True))

    if not impl.isidentifier():
        raise RouterError(f"Engine name '{impl}' is not a valid identifier")

    module_root = ENGINES_ROOT / impl
    fallback_used = False
    if not module_root.exists():
        if allow_fallback and impl != _DEF_IMPL:
            _LOGGER.warning("engine %r is not installed; falling back to %r", impl, _DEF_IMPL)
            module_root = ENGINES_ROOT / _DEF_IMPL
            impl = _DEF_IMPL
            fallback_used = True
            decision_source = "fallback"
        else:
            raise RouterError(f"Engine implementation '{impl}' is not available")

    module_path = module_root / "__init__.py"
    if not module_path.exists():
        raise RouterError(
            f"Engine package '{module_root}' does not contain an __init__.py file"
        )

    _LOGGER.info("resolved engine %r (source=%s, profile=%s)", impl, decision_source, profile)
    return ResolvedEngine(
        impl_id=impl,
        module_id=f"pagerank:/{impl}@",
        module_path=module_path,
        profile=profile,
        decision_source=decision_source,
        allow_fallback=allow_fallback,
        fallback_used=fallback_used,
        config=_engine_settings(impl),
    )


__all__ = ["ENGINES_ROOT", "ResolvedEngine", "RouterError", "resolve"]
