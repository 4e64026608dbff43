# Area: Dispatch
"""
leaderboard_bot._dispatch.dispatcher — Command Dispatcher
=========================================================

Wires one handler per command kind onto a CommandRouter and exposes a
single ``dispatch()`` entry point. Each call is independent; the
dispatcher keeps no state between messages.
"""

import logging
from typing import Optional

from .._store import RecordStore
from .commands import Command, CommandKind
from .handler_fallback import POLICY_SILENT, UnknownIntentHandler, UnrecognizedHandler
from .handler_record_game import RecordGameHandler
from .handler_show_leaderboard import ShowLeaderboardHandler
from .router import CommandRouter

logger = logging.getLogger("leaderboard_bot.dispatch")


class Dispatcher:
    """
    Turns structured commands into store transitions and reply text.

    Args:
        store: The RecordStore holding the leaderboard
        unknown_intent_policy: "silent" or "reply"
    """

    def __init__(self, store: RecordStore, unknown_intent_policy: str = POLICY_SILENT):
        self.store = store
        self.router = CommandRouter()
        self.router.register_handler(CommandKind.SHOW_LEADERBOARD, ShowLeaderboardHandler(store))
        self.router.register_handler(CommandKind.RECORD_GAME, RecordGameHandler(store))
        self.router.register_handler(CommandKind.UNRECOGNIZED, UnrecognizedHandler())
        self.router.register_handler(
            CommandKind.UNKNOWN_INTENT, UnknownIntentHandler(unknown_intent_policy)
        )

    def dispatch(self, command: Command) -> Optional[str]:
        """Handle one command. Returns reply text, or None for silence."""
        reply = self.router.route(command)
        if reply is None:
            logger.debug(f"No reply for {command.kind}")
        return reply
