from feature_flags import (
    get_call_log_feature,
    is_call_log_enabled,
    reload as reload_features,
)


def setup_function():
    reload_features()


def teardown_function():
    reload_features()


def test_call_log_disabled_by_default():
    assert is_call_log_enabled({}, profile="dev") is False


def test_call_log_enabled_for_prod():
    assert is_call_log_enabled({}, profile="prod") is True


def test_call_log_can_be_overridden_via_env():
    assert is_call_log_enabled({"CLI_CALL_LOG_ENABLED": "1"}, profile="dev") is True
    assert is_call_log_enabled({"CALL_LOG_ENABLED": "off"}, profile="prod") is False
    assert is_call_log_enabled({"PAGERANK_CALL_LOG_ENABLED": "true"}, profile="dev") is True


def test_cli_override_wins_over_environment():
    env = {"CLI_CALL_LOG_ENABLED": "0", "PAGERANK_CALL_LOG_ENABLED": "1"}
    assert is_call_log_enabled(env, profile="dev") is False


def test_unrecognised_override_is_ignored():
    assert is_call_log_enabled({"CALL_LOG_ENABLED": "maybe"}, profile="prod") is True


def test_call_log_feature_merges_profile_overrides():
    assert get_call_log_feature("dev")["enabled"] is False
    assert get_call_log_feature("prod")["enabled"] is True


def test_features_path_override(tmp_path, monkeypatch):
    path = tmp_path / "features.toml"
    path.write_text("[call_log]\nenabled = true\n", encoding="utf-8")
    monkeypatch.setenv("PAGERANK_FEATURES_PATH", str(path))
    reload_features()

    assert is_call_log_enabled({}, profile="dev") is True
