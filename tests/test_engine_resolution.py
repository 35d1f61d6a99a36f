"""Engine resolution through the router and the dynamic loader."""

from __future__ import annotations

import logging

import pytest

from orchestrator.router import RouterError, resolve
from ports._loader import load_module


def test_config_selects_reference_engine():
    resolved = resolve("dev", {})

    assert resolved.impl_id == "reference"
    assert resolved.decision_source == "config"
    assert not resolved.fallback_used
    assert resolved.module_path.name == "__init__.py"
    assert resolved.config["max_iter"] == 10000


def test_environment_then_cli_take_precedence():
    from_env = resolve("dev", {"PAGERANK_ENGINE_IMPL": "reference"})
    assert from_env.decision_source == "env"

    from_cli = resolve(
        "dev",
        {"PAGERANK_ENGINE_IMPL": "prpack", "CLI_PAGERANK_ENGINE_IMPL": "reference"},
    )
    assert from_cli.impl_id == "reference"
    assert from_cli.decision_source == "cli"


def test_missing_engine_falls_back_when_allowed(caplog):
    with caplog.at_level(logging.WARNING, logger="orchestrator.router"):
        resolved = resolve("dev", {"CLI_PAGERANK_ENGINE_IMPL": "prpack"})

    assert resolved.impl_id == "reference"
    assert resolved.fallback_used
    assert resolved.decision_source == "fallback"
    assert "falling back" in caplog.text


def test_ci_profile_disables_fallback():
    with pytest.raises(RouterError, match="not available"):
        resolve("ci", {"CLI_PAGERANK_ENGINE_IMPL": "prpack"})


def test_engine_names_must_be_identifiers():
    with pytest.raises(RouterError):
        resolve("dev", {"CLI_PAGERANK_ENGINE_IMPL": "../contracts"})


def test_loader_exposes_engine_port():
    module = load_module(resolve("dev", {}))

    assert module.DESCRIPTOR["impl_id"] == "reference"
    assert callable(module.port_solve)
    assert load_module(resolve("dev", {})) is module
