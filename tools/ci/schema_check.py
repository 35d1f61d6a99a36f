"""Validate JSONL call events against a published JSON schema."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Iterable, List, Mapping

import jsonschema

ROOT = Path(__file__).resolve().parents[2]
DEFAULT_SCHEMA = ROOT / "schemas" / "pagerank.call.v1.schema.json"


def _load_events(path: Path) -> List[Mapping[str, Any]]:
    events: List[Mapping[str, Any]] = []
    for line_no, line in enumerate(path.read_text("utf-8").splitlines(), start=1):
        if not line.strip():
            continue
        try:
            payload = json.loads(line)
        except json.JSONDecodeError as exc:
            raise SystemExit(f"invalid JSON on line {line_no}: {exc}")
        if not isinstance(payload, Mapping):
            raise SystemExit(f"event on line {line_no} must be an object")
        events.append(payload)
    return events


def _load_schema(path: Path) -> Mapping[str, Any]:
    try:
        return json.loads(path.read_text("utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"invalid schema JSON: {exc}")


def _validate(events: Iterable[Mapping[str, Any]], schema: Mapping[str, Any]) -> List[str]:
    validator_cls = jsonschema.validators.validator_for(schema)
    validator_cls.check_schema(schema)
    validator = validator_cls(schema)
    errors: List[str] = []
    for index, event in enumerate(events):
        for error in validator.iter_errors(event):
            pointer = "/".join(str(part) for part in error.path)
            errors.append(f"event[{index}] {pointer}: {error.message}")
    return errors


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--schema", type=Path, default=DEFAULT_SCHEMA, help="Path to JSON schema")
    parser.add_argument("--events", type=Path, required=True, help="Path to call events JSONL")
    args = parser.parse_args(list(argv) if argv is not None else None)

    schema = _load_schema(args.schema)
    events = _load_events(args.events)
    errors = _validate(events, schema)

    if errors:
        for message in errors:
            print(message, file=sys.stderr)
        return 1

    print(f"Validated {len(events)} events against {args.schema.name}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
