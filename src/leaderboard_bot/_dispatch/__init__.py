# Area: Dispatch
"""
Command Dispatcher - validation and effects for structured commands.

This package handles:
- Command variants (ShowLeaderboard, RecordGame, UnknownIntent, Unrecognized)
- Routing each variant to its handler
- Reply text rendering
"""

from .commands import (
    Command,
    CommandKind,
    RecordGame,
    ShowLeaderboard,
    UnknownIntent,
    Unrecognized,
    parse_command,
)
from .dispatcher import Dispatcher
from .handler_base import BaseCommandHandler
from .handler_fallback import POLICY_REPLY, POLICY_SILENT, UNKNOWN_INTENT_POLICIES
from .router import CommandRouter

__all__ = [
    "Command",
    "CommandKind",
    "RecordGame",
    "ShowLeaderboard",
    "UnknownIntent",
    "Unrecognized",
    "parse_command",
    "Dispatcher",
    "BaseCommandHandler",
    "POLICY_REPLY",
    "POLICY_SILENT",
    "UNKNOWN_INTENT_POLICIES",
    "CommandRouter",
]
