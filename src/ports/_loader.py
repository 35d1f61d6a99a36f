"""Helpers for loading engine modules dynamically."""

from __future__ import annotations

import importlib.util
import sys
from types import ModuleType

from orchestrator.router import ResolvedEngine


def _module_name(resolved: ResolvedEngine) -> str:
    return f"pagerank_engine_{resolved.impl_id}"


def load_module(resolved: ResolvedEngine) -> ModuleType:
    """Import the engine described by ``resolved``; repeated loads reuse it."""

    module_name = _module_name(resolved)
    cached = sys.modules.get(module_name)
    if cached is not None:
        return cached

    module_path = resolved.module_path.resolve()
    spec = importlib.util.spec_from_file_location(module_name, module_path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Could not load module from {module_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    return module


__all__ = ["load_module"]
