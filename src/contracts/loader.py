"""Schema loading utilities for configuration and call events."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict, List

import jsonschema

_REPO_ROOT = Path(__file__).resolve().parents[2]
SCHEMA_ROOT = _REPO_ROOT / "schemas"

_schema_cache: Dict[str, Dict[str, Any]] = {}
_compiled_cache: Dict[str, Any] = {}


def load_schema(name: str) -> Dict[str, Any]:
    """Load ``schemas/<name>.schema.json``."""

    if "/" in name or "\\" in name or name.startswith("."):
        raise ValueError(f"Invalid schema name: {name!r}")

    if name in _schema_cache:
        return copy.deepcopy(_schema_cache[name])

    path = SCHEMA_ROOT / f"{name}.schema.json"
    schema = json.loads(path.read_text("utf-8"))
    _schema_cache[name] = schema
    return copy.deepcopy(schema)


def compile_schema(name: str) -> Any:
    """Return a cached ``jsonschema`` validator for schema ``name``."""

    if name in _compiled_cache:
        return _compiled_cache[name]

    schema = load_schema(name)
    validator_cls = jsonschema.validators.validator_for(schema)
    validator_cls.check_schema(schema)
    validator = validator_cls(schema)
    _compiled_cache[name] = validator
    return validator


def _error_path(error: Any) -> str:
    components: List[str] = ["$"]
    for part in error.absolute_path:
        if isinstance(part, int):
            components.append(f"[{part}]")
        else:
            components.append(f".{part}")
    return "".join(components)


def schema_errors(name: str, payload: Any) -> List[str]:
    """Return ``"<path>: <message>"`` strings for every violation of ``name``."""

    validator = compile_schema(name)
    return [
        f"{_error_path(error)}: {error.message}"
        for error in sorted(validator.iter_errors(payload), key=_error_path)
    ]


__all__ = ["SCHEMA_ROOT", "compile_schema", "load_schema", "schema_errors"]
