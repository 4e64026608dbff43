# Area: Intent Extraction
"""
leaderboard_bot.demo_extractor — Rule-based offline extractor
=============================================================

A ready-to-use IntentExtractor that needs no API key. Understands a
small set of phrasings, enough to try the bot locally:

    "show the leaderboard" / "standings" / "scores"
    "Alice won against Bob and Carol"
    "Alice won among Alice, Bob, Carol"
    "Alice beat Bob, Carol"

Usage:
    from leaderboard_bot import BotRunner, ConsoleChannel, DemoIntentExtractor

    runner = BotRunner(config, ConsoleChannel(), DemoIntentExtractor())
    runner.run()
"""

import re
from typing import List, Sequence

from ._dispatch.commands import Command, RecordGame, ShowLeaderboard, Unrecognized
from .extractor import IntentExtractor
from .types import ConversationTurn

_SHOW_PATTERN = re.compile(r"\b(leaderboard|standings|scores?|rankings?)\b", re.IGNORECASE)

# Opponents listed: the winner is added to the participants
_VERSUS_PATTERN = re.compile(
    r"^\s*(?P<winner>.+?)\s+(?:won\s+(?:the\s+game\s+)?(?:against|vs\.?|over)|beat)\s+(?P<players>.+?)[.!]?\s*$",
    re.IGNORECASE,
)

# Full participant list given: taken as-is
_AMONG_PATTERN = re.compile(
    r"^\s*(?P<winner>.+?)\s+won\s+(?:the\s+game\s+)?(?:among|between|with)\s+(?P<players>.+?)[.!]?\s*$",
    re.IGNORECASE,
)

# "X won" with nobody else named
_BARE_WIN_PATTERN = re.compile(r"^\s*(?P<winner>.+?)\s+won[.!]?\s*$", re.IGNORECASE)

_SPLIT_PATTERN = re.compile(r"\s*,\s*(?:and\s+)?|\s+and\s+", re.IGNORECASE)


def split_names(text: str) -> List[str]:
    """Split "a, b and c" into ["a", "b", "c"]."""
    return [name.strip() for name in _SPLIT_PATTERN.split(text) if name.strip()]


class DemoIntentExtractor(IntentExtractor):
    """Pattern-matching extractor. Ignores conversation context."""

    def extract(
        self, text: str, context: Sequence[ConversationTurn] = ()
    ) -> Command:
        match = _VERSUS_PATTERN.match(text)
        if match:
            winner = match.group("winner").strip()
            return RecordGame(players=[winner] + split_names(match.group("players")), winner=winner)

        match = _AMONG_PATTERN.match(text)
        if match:
            return RecordGame(
                players=split_names(match.group("players")),
                winner=match.group("winner").strip(),
            )

        match = _BARE_WIN_PATTERN.match(text)
        if match:
            return RecordGame(players=[], winner=match.group("winner").strip())

        if _SHOW_PATTERN.search(text):
            return ShowLeaderboard()

        return Unrecognized(reason="no matching pattern")
