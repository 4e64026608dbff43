# Area: Store
"""
Record Store — locked, snapshot-replace persistence.

This package contains:
- FileLock: bounded-retry exclusive lock per file
- SnapshotFile: atomic JSON document replace
- RecordStore: leaderboard and conversation log access
- ConversationLog: rolling context window bookkeeping
"""

from .conversation import MAX_CONVERSATION_TURNS, ConversationLog, truncate_turns
from .file_lock import FileLock, backoff_delay
from .record_store import (
    DEFAULT_CHAT_HISTORY_FILE,
    DEFAULT_LEADERBOARD_FILE,
    RecordStore,
)
from .snapshot_file import SnapshotFile

__all__ = [
    "MAX_CONVERSATION_TURNS",
    "ConversationLog",
    "truncate_turns",
    "FileLock",
    "backoff_delay",
    "DEFAULT_CHAT_HISTORY_FILE",
    "DEFAULT_LEADERBOARD_FILE",
    "RecordStore",
    "SnapshotFile",
]
