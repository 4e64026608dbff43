"""
leaderboard_bot.types — TypedDict schemas for messages and persisted turns
==========================================================================

Documents the exact structure of the dicts that cross the package's
seams: inbound messages from a channel and conversation turns stored in
the chat history file.

    >>> ConversationTurn.__annotations__
    {'role': Literal['user', 'assistant'], 'content': str}
"""

from typing import Dict, Literal, TypedDict


# Player identifier -> win count
Leaderboard = Dict[str, int]


class ConversationTurn(TypedDict):
    """One entry of the rolling conversation log.

    Fields
    ------
    role : "user" | "assistant"
        Who produced the message.
    content : str
        The message text.
    """
    role: Literal["user", "assistant"]
    content: str


class InboundMessage(TypedDict):
    """A message delivered by a MessageChannel.

    Fields
    ------
    text : str
        Raw message text, any length.
    sender : str
        Channel-specific sender identifier, used as the reply recipient.
    is_bot : bool
        True for automated senders; such messages are ignored entirely.
    """
    text: str
    sender: str
    is_bot: bool
