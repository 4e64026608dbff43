# Area: Store
"""
leaderboard_bot._store.record_store — Leaderboard and conversation storage
==========================================================================

The only component that touches the two persisted files:

    leaderboard.json    {"alice": 2, "bob": 0, ...}
    chat_history.json   [{"role": "user", "content": "..."}, ...]

Storage faults never escape this class. Reads degrade to an empty value
and writes report False; both are logged. Callers cannot tell an empty
leaderboard from an unreadable one.

The leaderboard and the conversation log have independent locks and no
method holds both.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Annotated, Any, Callable, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, StrictInt, TypeAdapter, ValidationError

from ..errors import LeaderboardBotError, StoreCorruptError
from ..types import ConversationTurn, Leaderboard
from .conversation import MAX_CONVERSATION_TURNS, truncate_turns
from .file_lock import DEFAULT_RETRIES
from .snapshot_file import SnapshotFile

logger = logging.getLogger("leaderboard_bot.store")

DEFAULT_LEADERBOARD_FILE = "leaderboard.json"
DEFAULT_CHAT_HISTORY_FILE = "chat_history.json"

WinCount = Annotated[StrictInt, Field(ge=0)]


class _TurnModel(BaseModel):
    role: Literal["user", "assistant"]
    content: str


_LEADERBOARD_ADAPTER = TypeAdapter(Dict[str, WinCount])
_CONVERSATION_ADAPTER = TypeAdapter(List[_TurnModel])

# Everything a storage operation may raise that we absorb at this boundary
_STORAGE_ERRORS = (OSError, ValueError, LeaderboardBotError)


def _validation_problems(exc: ValidationError) -> List[str]:
    return [
        f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
        for err in exc.errors()
    ]


class RecordStore:
    """
    Locked, snapshot-replace persistence for the leaderboard and chat log.

    Construct once at startup and pass it to whatever needs it.

    Args:
        leaderboard_path: Path of the leaderboard JSON file
        conversation_path: Path of the conversation log JSON file
        lock_retries: Lock retry budget for every operation
    """

    def __init__(
        self,
        leaderboard_path: Union[str, Path] = DEFAULT_LEADERBOARD_FILE,
        conversation_path: Union[str, Path] = DEFAULT_CHAT_HISTORY_FILE,
        lock_retries: int = DEFAULT_RETRIES,
    ):
        self._leaderboard = SnapshotFile(leaderboard_path, dict, lock_retries)
        self._conversation = SnapshotFile(conversation_path, list, lock_retries)

    @property
    def leaderboard_path(self) -> Path:
        return self._leaderboard.path

    @property
    def conversation_path(self) -> Path:
        return self._conversation.path

    # ── Leaderboard ───────────────────────────────────────────

    def read_leaderboard(self) -> Leaderboard:
        """Return the leaderboard, or {} if it is absent or unreadable."""
        try:
            raw = self._leaderboard.read()
            return self._parse_leaderboard(raw)
        except _STORAGE_ERRORS as e:
            logger.error(f"Error reading leaderboard: {e}")
            return {}

    def write_leaderboard(self, leaderboard: Leaderboard) -> bool:
        """Persist the full leaderboard. Returns False if the write was lost."""
        try:
            board = self._parse_leaderboard(dict(leaderboard))
            self._leaderboard.write(board)
            return True
        except _STORAGE_ERRORS as e:
            logger.error(f"Error writing leaderboard: {e}")
            return False

    def update_leaderboard(
        self, fn: Callable[[Leaderboard], Optional[Leaderboard]]
    ) -> Optional[Leaderboard]:
        """
        Read-modify-write the leaderboard under a single lock.

        ``fn`` may mutate the board in place (returning None) or return a
        new mapping. An unreadable document is replaced. Returns the
        board that was written, or None if the update failed.
        """
        def apply(raw: Any) -> Leaderboard:
            try:
                board = self._parse_leaderboard(raw)
            except StoreCorruptError as e:
                logger.warning(f"Replacing unreadable leaderboard: {e}")
                board = {}
            result = fn(board)
            return self._parse_leaderboard(board if result is None else result)

        try:
            return self._leaderboard.update(apply)
        except _STORAGE_ERRORS as e:
            logger.error(f"Error updating leaderboard: {e}")
            return None

    def _parse_leaderboard(self, raw: Any) -> Leaderboard:
        try:
            return _LEADERBOARD_ADAPTER.validate_python(raw)
        except ValidationError as e:
            raise StoreCorruptError(str(self.leaderboard_path), _validation_problems(e)) from e

    # ── Conversation log ──────────────────────────────────────

    def read_conversation(self) -> List[ConversationTurn]:
        """Return the stored turns, oldest first, or [] on absence/failure."""
        try:
            raw = self._conversation.read()
            return self._parse_conversation(raw)
        except _STORAGE_ERRORS as e:
            logger.error(f"Error reading chat history: {e}")
            return []

    def write_conversation(self, turns: List[ConversationTurn]) -> bool:
        """Persist the most recent turns. Returns False if the write was lost."""
        try:
            window = truncate_turns(self._parse_conversation(list(turns)))
            self._conversation.write(window)
            return True
        except _STORAGE_ERRORS as e:
            logger.error(f"Error writing chat history: {e}")
            return False

    def append_turns(self, *turns: ConversationTurn) -> List[ConversationTurn]:
        """
        Append turns to the log under a single lock and truncate.

        Returns the resulting window. If persisting fails the window is
        still computed from what could be read, so the caller keeps a
        usable context.
        """
        new_turns = self._parse_conversation(list(turns))

        def apply(raw: Any) -> List[ConversationTurn]:
            try:
                history = self._parse_conversation(raw)
            except StoreCorruptError as e:
                logger.warning(f"Replacing unreadable chat history: {e}")
                history = []
            return truncate_turns(history + new_turns, MAX_CONVERSATION_TURNS)

        try:
            return self._conversation.update(apply)
        except _STORAGE_ERRORS as e:
            logger.error(f"Error appending to chat history: {e}")
            return truncate_turns(self.read_conversation() + new_turns)

    def _parse_conversation(self, raw: Any) -> List[ConversationTurn]:
        try:
            models = _CONVERSATION_ADAPTER.validate_python(raw)
        except ValidationError as e:
            raise StoreCorruptError(str(self.conversation_path), _validation_problems(e)) from e
        return [{"role": m.role, "content": m.content} for m in models]
