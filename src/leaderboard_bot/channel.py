# Area: Channel
"""
leaderboard_bot.channel — Message channel seam
==============================================

A MessageChannel delivers inbound text to the bot and carries replies
back. The runner calls poll() to get new messages and send() to deliver
each reply. Transport details (chat service SDKs, sockets, credentials)
live entirely behind this interface.

ConsoleChannel is the built-in implementation: one line of stdin per
message, replies on stdout.
"""

from __future__ import annotations
import logging
import sys
from abc import ABC, abstractmethod
from typing import List, Optional, TextIO

from .types import InboundMessage

logger = logging.getLogger("leaderboard_bot.channel")


class MessageChannel(ABC):
    """Abstract transport for inbound messages and outbound replies."""

    @abstractmethod
    def poll(self) -> List[InboundMessage]:
        """Return messages received since the last call (may be empty)."""
        ...

    @abstractmethod
    def send(self, recipient: str, text: str) -> None:
        """Deliver one reply."""
        ...

    def connect(self) -> None:
        """Open the transport. Default: nothing to do."""

    def disconnect(self) -> None:
        """Close the transport. Default: nothing to do."""

    @property
    def closed(self) -> bool:
        """True once the channel will never deliver another message."""
        return False


class ConsoleChannel(MessageChannel):
    """
    Interactive channel on text streams.

    Each poll() reads one line. End of input closes the channel.
    """

    SENDER = "console"

    def __init__(
        self,
        stream_in: Optional[TextIO] = None,
        stream_out: Optional[TextIO] = None,
        prompt: str = "> ",
    ):
        self.stream_in = stream_in if stream_in is not None else sys.stdin
        self.stream_out = stream_out if stream_out is not None else sys.stdout
        self.prompt = prompt
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def poll(self) -> List[InboundMessage]:
        if self._closed:
            return []
        if self.prompt:
            self.stream_out.write(self.prompt)
            self.stream_out.flush()
        line = self.stream_in.readline()
        if line == "":
            logger.info("Console input closed")
            self._closed = True
            return []
        return [{"text": line.rstrip("\r\n"), "sender": self.SENDER, "is_bot": False}]

    def send(self, recipient: str, text: str) -> None:
        self.stream_out.write(text + "\n")
        self.stream_out.flush()
