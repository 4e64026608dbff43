# Area: Dispatch
"""
leaderboard_bot._dispatch.handler_record_game — Record Game Handler
===================================================================

Handles RecordGame commands.

Validation runs in order and the first failure ends the command with a
rejection reply and no write:
1. players empty or winner empty
2. winner not among the players

A valid game is applied as one locked read-modify-write: every player
gets an entry (0 if new) and the winner's count goes up by exactly one.
"""

import logging
from typing import Optional

from .._store import RecordStore
from ..types import Leaderboard
from .commands import RecordGame
from .handler_base import BaseCommandHandler
from . import replies

logger = logging.getLogger("leaderboard_bot.dispatch.handler.record_game")


class RecordGameHandler(BaseCommandHandler):
    """Validates a game result and credits the winner."""

    def __init__(self, store: RecordStore):
        self.store = store

    def handle(self, command: RecordGame) -> Optional[str]:
        self.log_handling(command)
        players = command.players
        winner = command.winner

        if not players or not winner:
            logger.info("Rejected game: missing players or winner")
            return replies.MISSING_PLAYERS_OR_WINNER

        if winner not in players:
            logger.info(f"Rejected game: winner {winner!r} not in {players}")
            return replies.winner_not_in_players(winner, players)

        def credit_winner(leaderboard: Leaderboard) -> None:
            for player in players:
                leaderboard.setdefault(player, 0)
            leaderboard[winner] += 1

        updated = self.store.update_leaderboard(credit_winner)
        if updated is None:
            logger.error(f"Game won by {winner!r} could not be saved")
            return replies.SAVE_FAILED

        logger.info(f"Recorded win for {winner!r} ({updated[winner]} total)")
        return replies.game_recorded(winner, players)
