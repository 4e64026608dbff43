# Area: Shared
"""
leaderboard_bot.cli — Command-line interface
============================================

Runs the bot on the console channel.

Usage:
    python -m leaderboard_bot --demo                  # Offline, rule-based extractor
    python -m leaderboard_bot --config config.json    # Claude extractor (ANTHROPIC_API_KEY)
    python -m leaderboard_bot --show                  # Print the leaderboard and exit

Settings come from, in increasing priority: built-in defaults, the JSON
config file, environment variables (a .env file in the working
directory is loaded first).

Demo mode can be enabled via:
    1. CLI flag: --demo
    2. Config key: demo_mode: true
    3. Environment variable: DEMO_MODE=true
"""

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from ._dispatch.replies import render_leaderboard
from ._runner_config import apply_defaults, apply_env_overrides, parse_bool, validate_config
from ._shared import enable_quiet_mode, setup_logging
from ._store import RecordStore
from .channel import ConsoleChannel
from .demo_extractor import DemoIntentExtractor
from .extractor import AnthropicIntentExtractor, IntentExtractor
from .runner import BotRunner


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Leaderboard Bot - record game wins from chat messages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m leaderboard_bot --demo
  python -m leaderboard_bot --config config.json
  UNKNOWN_INTENT_POLICY=reply python -m leaderboard_bot --config config.json
        """,
    )

    parser.add_argument(
        "--demo",
        action="store_true",
        help="Use the rule-based extractor (no API key needed)",
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to JSON config file",
    )

    parser.add_argument(
        "--show",
        action="store_true",
        help="Print the current leaderboard and exit",
    )

    return parser.parse_args(argv)


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """
    Load config from file, then apply environment overrides.

    Raises:
        ValueError: If the file is not a JSON object or an override is malformed
    """
    config: Dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path, encoding="utf-8") as f:
                config = json.load(f)
            if not isinstance(config, dict):
                raise ValueError(f"Config file {path} must contain a JSON object")

    return apply_env_overrides(config)


def is_demo_mode(args: argparse.Namespace, config: Dict[str, Any]) -> bool:
    """Check if demo mode is enabled via CLI or config (env already merged)."""
    return bool(args.demo) or parse_bool(config.get("demo_mode", False))


def get_extractor(args: argparse.Namespace, config: Dict[str, Any]) -> IntentExtractor:
    """Pick the extractor for the current mode."""
    if is_demo_mode(args, config):
        return DemoIntentExtractor()

    if not os.environ.get("ANTHROPIC_API_KEY"):
        print("Error: ANTHROPIC_API_KEY is not set.", file=sys.stderr)
        print("Set it in the environment or .env, or use --demo.", file=sys.stderr)
        sys.exit(1)

    return AnthropicIntentExtractor(
        model=config["model"],
        max_tokens=config["max_tokens"],
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    load_dotenv()
    args = parse_args(argv)

    try:
        config = apply_defaults(load_config(args.config))
        validate_config(config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    store = RecordStore(
        leaderboard_path=config["leaderboard_file"],
        conversation_path=config["chat_history_file"],
        lock_retries=config["lock_retries"],
    )

    if args.show:
        print(render_leaderboard(store.read_leaderboard()))
        return 0

    setup_logging(log_file_path=config["log_file"])
    enable_quiet_mode()

    extractor = get_extractor(args, config)

    runner = BotRunner(config=config, channel=ConsoleChannel(), extractor=extractor, store=store)
    runner.run()
    return 0
