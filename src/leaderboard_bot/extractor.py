# Area: Intent Extraction
"""
leaderboard_bot.extractor — Natural language to structured command
==================================================================

An IntentExtractor turns the latest message text, plus optional recent
conversation turns, into one structured command. Extractors never
raise: model errors and malformed responses come back as
``Unrecognized``.

The default implementation asks Claude to pick one of two tools:

    show_leaderboard()                       -> ShowLeaderboard
    record_game(players: [str], winner: str) -> RecordGame

Subclass IntentExtractor to plug in another model or a rule engine
(see demo_extractor.DemoIntentExtractor).
"""

from __future__ import annotations
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

import anthropic
from pydantic import ValidationError

from ._dispatch.commands import (
    Command,
    CommandKind,
    RecordGame,
    ShowLeaderboard,
    UnknownIntent,
    Unrecognized,
)
from .errors import ExtractionError
from .types import ConversationTurn

logger = logging.getLogger("leaderboard_bot.extractor")

DEFAULT_MODEL = "claude-3-haiku-20240307"
DEFAULT_MAX_TOKENS = 200
DEFAULT_TEMPERATURE = 0.0

SYSTEM_PROMPT = (
    "You keep score for a group of friends who play games together. "
    "When a message reports the outcome of a game, call record_game with every "
    "player who took part (including the winner) and the winner's name, spelled "
    "exactly as in the message. When a message asks for the standings, call "
    "show_leaderboard. Earlier messages are context only; act on the latest one."
)

TOOLS: List[Dict[str, Any]] = [
    {
        "name": CommandKind.SHOW_LEADERBOARD,
        "description": "Retrieve and display the current leaderboard",
        "input_schema": {
            "type": "object",
            "properties": {},
            "required": [],
        },
    },
    {
        "name": CommandKind.RECORD_GAME,
        "description": "Record the outcome of a game",
        "input_schema": {
            "type": "object",
            "properties": {
                "players": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "List of player names",
                },
                "winner": {
                    "type": "string",
                    "description": "Name of the winning player",
                },
            },
            "required": ["players", "winner"],
        },
    },
]


class IntentExtractor(ABC):
    """
    Abstract base class for intent extraction.

    ``extract`` must always return a command; failures are reported as
    ``Unrecognized`` with a short reason.
    """

    @abstractmethod
    def extract(
        self, text: str, context: Sequence[ConversationTurn] = ()
    ) -> Command:
        """
        Parameters
        ----------
        text : str
            The latest inbound message.
        context : sequence of ConversationTurn
            Recent turns, oldest first, not including ``text``.

        Returns
        -------
        Command
            ShowLeaderboard, RecordGame, UnknownIntent or Unrecognized.
        """
        ...


def command_from_tool_call(name: str, arguments: Any) -> Command:
    """
    Map a tool/function call to a command variant.

    ``arguments`` may be a dict or a JSON object string. Payloads that are
    not objects, or whose fields have the wrong types, become Unrecognized.
    """
    if isinstance(arguments, str):
        try:
            arguments = json.loads(arguments) if arguments.strip() else {}
        except ValueError:
            return Unrecognized(reason=f"unparseable arguments for {name}")
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        return Unrecognized(reason=f"arguments for {name} are not an object")

    if name == CommandKind.SHOW_LEADERBOARD:
        return ShowLeaderboard()
    if name == CommandKind.RECORD_GAME:
        try:
            return RecordGame(
                players=arguments.get("players"),
                winner=arguments.get("winner"),
            )
        except ValidationError as e:
            return Unrecognized(reason=f"invalid record_game payload: {e.error_count()} errors")
    return UnknownIntent(name=name)


def build_messages(
    text: str, context: Sequence[ConversationTurn]
) -> List[Dict[str, str]]:
    """
    Messages API payload: context turns then the latest text.

    Leading assistant turns are dropped and consecutive turns from the
    same role are merged, so the list starts with a user turn and
    alternates.
    """
    turns: List[Dict[str, str]] = []
    for turn in list(context) + [{"role": "user", "content": text}]:
        content = turn.get("content") or ""
        if not content:
            continue
        if not turns and turn["role"] != "user":
            continue
        if turns and turns[-1]["role"] == turn["role"]:
            turns[-1]["content"] += "\n" + content
        else:
            turns.append({"role": turn["role"], "content": content})
    return turns


class AnthropicIntentExtractor(IntentExtractor):
    """
    Claude-backed extractor using tool use.

    Args:
        client: Preconfigured ``anthropic.Anthropic``; built from the
            ANTHROPIC_API_KEY environment variable when omitted
        model: Model name
        max_tokens: Response token cap
        temperature: Sampling temperature
    """

    def __init__(
        self,
        client: Optional[anthropic.Anthropic] = None,
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
    ):
        self._client = client if client is not None else anthropic.Anthropic()
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    def extract(
        self, text: str, context: Sequence[ConversationTurn] = ()
    ) -> Command:
        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                system=SYSTEM_PROMPT,
                messages=build_messages(text, context),
                tools=TOOLS,
                tool_choice={"type": "auto"},
            )
            command = self._parse_response(response)
        except anthropic.APIError as e:
            logger.error(f"Error calling intent model: {e}")
            return Unrecognized(reason="model request failed")
        except ExtractionError as e:
            logger.error(e.format_error_log())
            return Unrecognized(reason=e.detail)

        logger.info(f"Extracted {command.kind}")
        return command

    def _parse_response(self, response: Any) -> Command:
        blocks = getattr(response, "content", None)
        if blocks is None:
            raise ExtractionError("response has no content", raw_output=response)

        for block in blocks:
            if getattr(block, "type", None) == "tool_use":
                return command_from_tool_call(block.name, block.input)

        return Unrecognized(reason="no command")
