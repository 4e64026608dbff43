# Area: Shared Tests
"""Tests for runner configuration helpers."""

import pytest

from leaderboard_bot._runner_config import (
    DEFAULT_CONFIG,
    apply_defaults,
    apply_env_overrides,
    parse_bool,
    validate_config,
)


class TestApplyDefaults:
    """Tests for apply_defaults."""

    def test_fills_missing_keys(self):
        config = apply_defaults({"leaderboard_file": "board.json"})
        assert config["leaderboard_file"] == "board.json"
        assert config["chat_history_file"] == "chat_history.json"
        assert config["lock_retries"] == 5
        assert config["unknown_intent_policy"] == "silent"

    def test_does_not_mutate_input(self):
        original = {"max_workers": 2}
        apply_defaults(original)
        assert original == {"max_workers": 2}

    @pytest.mark.parametrize("value, expected", [("false", False), ("0", False), ("yes", True), (True, True)])
    def test_flag_strings_become_bools(self, value, expected):
        config = apply_defaults({"conversation_enabled": value, "demo_mode": value})
        assert config["conversation_enabled"] is expected
        assert config["demo_mode"] is expected

    def test_defaults_are_valid(self):
        validate_config(dict(DEFAULT_CONFIG))


class TestApplyEnvOverrides:
    """Tests for apply_env_overrides."""

    def test_maps_and_converts(self):
        config = apply_env_overrides({}, environ={
            "LEADERBOARD_FILE": "/data/board.json",
            "LOCK_RETRIES": "3",
            "CONVERSATION_ENABLED": "no",
            "UNKNOWN_INTENT_POLICY": "reply",
        })
        assert config == {
            "leaderboard_file": "/data/board.json",
            "lock_retries": 3,
            "conversation_enabled": False,
            "unknown_intent_policy": "reply",
        }

    def test_env_overrides_file_values(self):
        config = apply_env_overrides({"max_workers": 8}, environ={"MAX_WORKERS": "2"})
        assert config["max_workers"] == 2

    def test_unrelated_env_ignored(self):
        assert apply_env_overrides({}, environ={"HOME": "/root"}) == {}

    def test_bad_integer(self):
        with pytest.raises(ValueError, match="MAX_TOKENS"):
            apply_env_overrides({}, environ={"MAX_TOKENS": "lots"})


class TestParseBool:
    """Tests for parse_bool."""

    @pytest.mark.parametrize("value", [True, "true", "1", "YES", " on "])
    def test_true(self, value):
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", [False, "false", "0", "", "nope"])
    def test_false(self, value):
        assert parse_bool(value) is False


class TestValidateConfig:
    """Tests for validate_config."""

    def test_bad_policy(self):
        with pytest.raises(ValueError, match="unknown_intent_policy"):
            validate_config(apply_defaults({"unknown_intent_policy": "shout"}))

    @pytest.mark.parametrize("key", ["max_workers", "poll_interval_seconds", "context_turns", "max_tokens"])
    def test_non_positive_ints(self, key):
        with pytest.raises(ValueError, match=key):
            validate_config(apply_defaults({key: 0}))

    def test_zero_lock_retries_allowed(self):
        validate_config(apply_defaults({"lock_retries": 0}))

    def test_negative_lock_retries(self):
        with pytest.raises(ValueError, match="lock_retries"):
            validate_config(apply_defaults({"lock_retries": -1}))

    def test_bool_is_not_int(self):
        with pytest.raises(ValueError, match="max_workers"):
            validate_config(apply_defaults({"max_workers": True}))

    def test_empty_path(self):
        with pytest.raises(ValueError, match="leaderboard_file"):
            validate_config(apply_defaults({"leaderboard_file": ""}))
