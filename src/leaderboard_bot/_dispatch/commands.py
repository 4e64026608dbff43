# Area: Dispatch
"""
leaderboard_bot._dispatch.commands — Structured command variants
================================================================

The typed output of intent extraction. Each variant carries a ``kind``
discriminator; required fields are never None. A missing value from the
extractor becomes an empty list / empty string so that the dispatcher's
validation rejects it with the proper reply.

    >>> parse_command({"kind": "record_game", "players": ["A", "B"], "winner": "A"})
    RecordGame(kind='record_game', players=['A', 'B'], winner='A')
"""

from __future__ import annotations
from typing import Annotated, Any, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class CommandKind:
    """String tags used as the ``kind`` discriminator."""
    SHOW_LEADERBOARD = "show_leaderboard"
    RECORD_GAME = "record_game"
    UNKNOWN_INTENT = "unknown_intent"
    UNRECOGNIZED = "unrecognized"


class ShowLeaderboard(BaseModel):
    """Display the current standings."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["show_leaderboard"] = CommandKind.SHOW_LEADERBOARD


class RecordGame(BaseModel):
    """Record one finished game: who played and who won."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["record_game"] = CommandKind.RECORD_GAME
    players: List[str] = Field(default_factory=list)
    winner: str = ""

    @field_validator("players", mode="before")
    @classmethod
    def _players_default(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("winner", mode="before")
    @classmethod
    def _winner_default(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("players")
    @classmethod
    def _distinct_players(cls, value: List[str]) -> List[str]:
        # dict preserves first-seen order
        return list(dict.fromkeys(value))


class UnknownIntent(BaseModel):
    """The extractor named an intent this bot does not implement."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["unknown_intent"] = CommandKind.UNKNOWN_INTENT
    name: str


class Unrecognized(BaseModel):
    """No usable command could be extracted from the message."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["unrecognized"] = CommandKind.UNRECOGNIZED
    reason: str = "no command"


Command = Annotated[
    Union[ShowLeaderboard, RecordGame, UnknownIntent, Unrecognized],
    Field(discriminator="kind"),
]

_COMMAND_ADAPTER: TypeAdapter = TypeAdapter(Command)


def parse_command(data: Any) -> Command:
    """Validate a dict into a command variant. Raises pydantic.ValidationError."""
    return _COMMAND_ADAPTER.validate_python(data)
