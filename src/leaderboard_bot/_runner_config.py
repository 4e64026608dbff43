# Area: Shared
"""
leaderboard_bot._runner_config — Runner Configuration
=====================================================

Defaults, environment overrides and validation for the bot config dict.
"""

import logging
import os
from typing import Any, Dict, Mapping, Optional

from ._dispatch.handler_fallback import POLICY_SILENT, UNKNOWN_INTENT_POLICIES
from ._store import DEFAULT_CHAT_HISTORY_FILE, DEFAULT_LEADERBOARD_FILE, MAX_CONVERSATION_TURNS
from .extractor import DEFAULT_MAX_TOKENS, DEFAULT_MODEL

logger = logging.getLogger("leaderboard_bot")

DEFAULT_CONFIG: Dict[str, Any] = {
    "leaderboard_file": DEFAULT_LEADERBOARD_FILE,
    "chat_history_file": DEFAULT_CHAT_HISTORY_FILE,
    "conversation_enabled": True,
    "context_turns": MAX_CONVERSATION_TURNS,
    "lock_retries": 5,
    "unknown_intent_policy": POLICY_SILENT,
    "model": DEFAULT_MODEL,
    "max_tokens": DEFAULT_MAX_TOKENS,
    "poll_interval_seconds": 1,
    "max_workers": 4,
    "log_file": "leaderboard_bot.log",
    "demo_mode": False,
}

# Environment variable -> config key
ENV_MAPPINGS = {
    "LEADERBOARD_FILE": "leaderboard_file",
    "CHAT_HISTORY_FILE": "chat_history_file",
    "CONVERSATION_ENABLED": "conversation_enabled",
    "CONTEXT_TURNS": "context_turns",
    "LOCK_RETRIES": "lock_retries",
    "UNKNOWN_INTENT_POLICY": "unknown_intent_policy",
    "LEADERBOARD_MODEL": "model",
    "MAX_TOKENS": "max_tokens",
    "POLL_INTERVAL_SECONDS": "poll_interval_seconds",
    "MAX_WORKERS": "max_workers",
    "LOG_FILE": "log_file",
    "DEMO_MODE": "demo_mode",
}

INT_KEYS = {"context_turns", "lock_retries", "max_tokens", "poll_interval_seconds", "max_workers"}
BOOL_KEYS = {"conversation_enabled", "demo_mode"}
PATH_KEYS = {"leaderboard_file", "chat_history_file"}

TRUE_VALUES = ("true", "1", "yes", "on")


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUE_VALUES


def apply_env_overrides(
    config: Dict[str, Any], environ: Optional[Mapping[str, str]] = None
) -> Dict[str, Any]:
    """
    Copy recognised environment variables into the config.

    Raises:
        ValueError: If an integer setting is not a number
    """
    environ = os.environ if environ is None else environ
    for env_key, config_key in ENV_MAPPINGS.items():
        if env_key not in environ:
            continue
        value: Any = environ[env_key]
        if config_key in INT_KEYS:
            try:
                value = int(value)
            except ValueError:
                raise ValueError(f"{env_key} must be an integer, got {value!r}") from None
        elif config_key in BOOL_KEYS:
            value = parse_bool(value)
        config[config_key] = value
    return config


def apply_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return a new dict with every missing key filled from DEFAULT_CONFIG.

    Flag values given as strings ("false", "0", ...) are converted to bool.
    """
    merged = dict(DEFAULT_CONFIG)
    merged.update(config)
    for key in BOOL_KEYS:
        merged[key] = parse_bool(merged[key])
    return merged


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate configuration values.

    Args:
        config: Configuration dict (after apply_defaults)

    Raises:
        ValueError: If any value is out of range
    """
    problems = []

    policy = config.get("unknown_intent_policy")
    if policy not in UNKNOWN_INTENT_POLICIES:
        problems.append(
            f"unknown_intent_policy must be one of {UNKNOWN_INTENT_POLICIES}, got {policy!r}"
        )

    for key in sorted(INT_KEYS):
        value = config.get(key)
        if isinstance(value, bool) or not isinstance(value, int):
            problems.append(f"{key} must be an integer, got {value!r}")
        elif key == "lock_retries" and value < 0:
            problems.append(f"lock_retries must be >= 0, got {value}")
        elif key != "lock_retries" and value <= 0:
            problems.append(f"{key} must be positive, got {value}")

    for key in sorted(PATH_KEYS):
        if not config.get(key):
            problems.append(f"{key} must be a non-empty path")

    if problems:
        raise ValueError(f"Invalid config: {problems}")

    if config["context_turns"] > MAX_CONVERSATION_TURNS:
        logger.warning(
            f"context_turns={config['context_turns']} capped at {MAX_CONVERSATION_TURNS}"
        )
