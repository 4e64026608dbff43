# Area: Dispatch
"""
leaderboard_bot._dispatch.handler_base — Base Command Handler
=============================================================

Abstract base class for all command handlers.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from .commands import Command

logger = logging.getLogger("leaderboard_bot.dispatch.handler")


class BaseCommandHandler(ABC):
    """
    Abstract base class for command handlers.

    Every handler validates its command before touching the store and
    returns the reply text, or None when the bot should stay silent.
    """

    @abstractmethod
    def handle(self, command: Command) -> Optional[str]:
        """
        Handle a command.

        Args:
            command: The structured command to handle

        Returns:
            Reply text, or None for no reply
        """
        pass

    def log_handling(self, command: Command) -> None:
        logger.info(f"Handling {command.kind}")
