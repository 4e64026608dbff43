# Area: Dispatch
"""
leaderboard_bot._dispatch.handler_fallback — Unrecognized / Unknown Intent
==========================================================================

Handlers for messages that produced no usable command. Neither touches
the store.

Unknown-but-structured intents follow a configurable policy:
- "silent": no reply at all
- "reply":  an explicit "didn't understand the intent" message
"""

import logging
from typing import Optional

from .commands import Unrecognized, UnknownIntent
from .handler_base import BaseCommandHandler
from . import replies

logger = logging.getLogger("leaderboard_bot.dispatch.handler.fallback")

POLICY_SILENT = "silent"
POLICY_REPLY = "reply"
UNKNOWN_INTENT_POLICIES = (POLICY_SILENT, POLICY_REPLY)


class UnrecognizedHandler(BaseCommandHandler):
    """Generic "couldn't understand" reply."""

    def handle(self, command: Unrecognized) -> Optional[str]:
        self.log_handling(command)
        logger.info(f"Unrecognized message: {command.reason}")
        return replies.NOT_UNDERSTOOD


class UnknownIntentHandler(BaseCommandHandler):
    """Applies the configured policy to intents with no implementation."""

    def __init__(self, policy: str = POLICY_SILENT):
        if policy not in UNKNOWN_INTENT_POLICIES:
            raise ValueError(
                f"Unknown intent policy {policy!r}, expected one of {UNKNOWN_INTENT_POLICIES}"
            )
        self.policy = policy

    def handle(self, command: UnknownIntent) -> Optional[str]:
        self.log_handling(command)
        logger.warning(f"Unknown intent {command.name!r} (policy={self.policy})")
        if self.policy == POLICY_REPLY:
            return replies.unknown_intent(command.name)
        return None
