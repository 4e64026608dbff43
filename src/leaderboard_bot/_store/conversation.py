# Area: Store
"""
leaderboard_bot._store.conversation — Rolling conversation window
=================================================================

Bookkeeping for the bounded chat log that is fed to the intent
extractor as context. Turns are appended for every inbound and outbound
message and evicted oldest-first beyond MAX_CONVERSATION_TURNS.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, List

from ..types import ConversationTurn

if TYPE_CHECKING:
    from .record_store import RecordStore

logger = logging.getLogger("leaderboard_bot.store.conversation")

MAX_CONVERSATION_TURNS = 1000


def truncate_turns(
    turns: List[ConversationTurn], limit: int = MAX_CONVERSATION_TURNS
) -> List[ConversationTurn]:
    """Keep the most recent ``limit`` turns. Shorter lists are returned as-is."""
    if limit <= 0:
        return []
    if len(turns) <= limit:
        return list(turns)
    return list(turns[-limit:])


class ConversationLog:
    """
    Appends user/assistant turns to the store and serves the context window.

    When disabled, nothing is recorded and the context is always empty.

    Args:
        store: RecordStore owning the chat history file
        enabled: Whether conversation context is kept at all
        context_turns: How many recent turns context() returns (capped)
    """

    def __init__(
        self,
        store: "RecordStore",
        enabled: bool = True,
        context_turns: int = MAX_CONVERSATION_TURNS,
    ):
        self.store = store
        self.enabled = enabled
        self.context_turns = max(0, min(context_turns, MAX_CONVERSATION_TURNS))

    def record_user(self, text: str) -> None:
        self._append({"role": "user", "content": text})

    def record_assistant(self, text: str) -> None:
        self._append({"role": "assistant", "content": text})

    def context(self) -> List[ConversationTurn]:
        """Most recent turns, oldest first."""
        if not self.enabled:
            return []
        return truncate_turns(self.store.read_conversation(), self.context_turns)

    def _append(self, turn: ConversationTurn) -> None:
        if not self.enabled:
            return
        window = self.store.append_turns(turn)
        logger.debug(f"Conversation log now holds {len(window)} turns")
