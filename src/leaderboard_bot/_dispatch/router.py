# Area: Dispatch
"""
leaderboard_bot._dispatch.router — Command Router
=================================================

Looks up the handler for a command by its ``kind`` tag. A kind with no
registered handler is logged and produces no reply.
"""

import logging
from typing import Dict, Optional, Protocol

from .commands import Command

logger = logging.getLogger("leaderboard_bot.dispatch.router")


class CommandHandler(Protocol):
    def handle(self, command: Command) -> Optional[str]:
        ...


class CommandRouter:
    """
    kind -> handler table.

        router = CommandRouter()
        router.register_handler(CommandKind.SHOW_LEADERBOARD, show_handler)
        reply = router.route(ShowLeaderboard())

    Registering a kind twice replaces the earlier handler.
    """

    def __init__(self):
        self._handlers: Dict[str, CommandHandler] = {}

    def register_handler(self, kind: str, handler: CommandHandler) -> None:
        if kind in self._handlers:
            logger.debug(f"Replacing handler for {kind}")
        self._handlers[kind] = handler
        logger.debug(f"{type(handler).__name__} handles {kind}")

    def get_handler(self, kind: str) -> Optional[CommandHandler]:
        return self._handlers.get(kind)

    def route(self, command: Command) -> Optional[str]:
        """Reply from the matching handler, or None when the kind is unhandled."""
        handler = self.get_handler(command.kind)
        if handler is None:
            logger.warning(f"No handler for command kind: {command.kind}")
            return None

        logger.info(f"{command.kind} -> {type(handler).__name__}")
        return handler.handle(command)
