from __future__ import annotations

import pytest

import project_config


@pytest.fixture(autouse=True)
def _fresh_config():
    project_config.reload()
    yield
    project_config.reload()


def test_get_section_reads_nested_values():
    assert project_config.get_section("engine.impl") == "reference"
    assert project_config.get_section("engine.reference.max_iter") == 10000


def test_get_section_falls_back_to_default():
    assert project_config.get_section("engine.missing", default=7) == 7


def test_get_section_raises_for_unknown_path():
    with pytest.raises(KeyError):
        project_config.get_section("engine.missing")


def test_config_path_override(tmp_path, monkeypatch):
    path = tmp_path / "config.toml"
    path.write_text('[engine]\nimpl = "reference"\n\n[engine.reference]\nmax_iter = 5\n', encoding="utf-8")
    monkeypatch.setenv("PAGERANK_CONFIG_PATH", str(path))
    project_config.reload()

    assert project_config.get_section("engine.reference.max_iter") == 5


def test_invalid_config_is_rejected(tmp_path, monkeypatch):
    path = tmp_path / "config.toml"
    path.write_text('[engine]\nimpl = "not an engine"\n', encoding="utf-8")
    monkeypatch.setenv("PAGERANK_CONFIG_PATH", str(path))
    project_config.reload()

    with pytest.raises(RuntimeError, match="Invalid configuration"):
        project_config.get_config()


def test_missing_config_is_reported(tmp_path, monkeypatch):
    monkeypatch.setenv("PAGERANK_CONFIG_PATH", str(tmp_path / "absent.toml"))
    project_config.reload()

    with pytest.raises(RuntimeError, match="was not found"):
        project_config.get_config()
