"""
leaderboard_bot — Chat-driven game leaderboard
==============================================

Keeps a shared tally of game wins per player and updates it from
natural-language chat messages.

Quick Start (offline, no API key):
    from leaderboard_bot import BotRunner, ConsoleChannel, DemoIntentExtractor
    runner = BotRunner(config={}, channel=ConsoleChannel(), extractor=DemoIntentExtractor())
    runner.run()

With Claude:
    from leaderboard_bot import AnthropicIntentExtractor, BotRunner, ConsoleChannel
    runner = BotRunner(config={}, channel=ConsoleChannel(), extractor=AnthropicIntentExtractor())
    runner.run()

Custom transport or extractor:
    class MyChannel(MessageChannel): ...          # implement poll() and send()
    class MyExtractor(IntentExtractor): ...       # implement extract()

Building blocks
---------------
    RecordStore   locked, atomic JSON storage of the leaderboard and chat log
    Dispatcher    validates a structured command and applies it to the store
"""

from ._dispatch import (
    Command,
    Dispatcher,
    RecordGame,
    ShowLeaderboard,
    UnknownIntent,
    Unrecognized,
)
from ._store import ConversationLog, RecordStore, MAX_CONVERSATION_TURNS
from .channel import ConsoleChannel, MessageChannel
from .demo_extractor import DemoIntentExtractor
from .errors import (
    LeaderboardBotError,
    LockAcquisitionError,
    StoreCorruptError,
    ExtractionError,
)
from .extractor import AnthropicIntentExtractor, IntentExtractor
from .runner import BotRunner
from .types import ConversationTurn, InboundMessage, Leaderboard

__all__ = [
    # Main classes
    "BotRunner",
    "RecordStore",
    "ConversationLog",
    "Dispatcher",
    "MAX_CONVERSATION_TURNS",
    # Seams
    "MessageChannel",
    "ConsoleChannel",
    "IntentExtractor",
    "AnthropicIntentExtractor",
    "DemoIntentExtractor",
    # Commands
    "Command",
    "ShowLeaderboard",
    "RecordGame",
    "UnknownIntent",
    "Unrecognized",
    # Errors
    "LeaderboardBotError",
    "LockAcquisitionError",
    "StoreCorruptError",
    "ExtractionError",
    # Types
    "ConversationTurn",
    "InboundMessage",
    "Leaderboard",
]
__version__ = "1.0.0"
