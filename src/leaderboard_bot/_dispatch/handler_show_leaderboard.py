# Area: Dispatch
"""
leaderboard_bot._dispatch.handler_show_leaderboard — Show Leaderboard Handler
=============================================================================

Handles ShowLeaderboard commands. Read-only: an unreadable leaderboard
is shown as empty.
"""

import logging
from typing import Optional

from .._store import RecordStore
from .commands import Command
from .handler_base import BaseCommandHandler
from .replies import render_leaderboard

logger = logging.getLogger("leaderboard_bot.dispatch.handler.show_leaderboard")


class ShowLeaderboardHandler(BaseCommandHandler):
    """Renders the current standings, leaders marked with a crown."""

    def __init__(self, store: RecordStore):
        self.store = store

    def handle(self, command: Command) -> Optional[str]:
        self.log_handling(command)
        leaderboard = self.store.read_leaderboard()
        logger.debug(f"Leaderboard has {len(leaderboard)} entries")
        return render_leaderboard(leaderboard)
