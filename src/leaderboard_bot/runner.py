# Area: Runner
"""
leaderboard_bot.runner — Bot Runner
===================================

Runs the message pipeline:

    channel.poll() → IntentExtractor (with conversation context)
                   → Dispatcher → RecordStore → channel.send()

Messages from one poll are handled concurrently on a thread pool. The
only state shared between them lives on disk behind per-file locks.
"""

from __future__ import annotations
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Tuple

from ._dispatch import Dispatcher, Unrecognized
from ._dispatch import replies
from ._runner_config import apply_defaults, validate_config
from ._store import ConversationLog, RecordStore
from .channel import MessageChannel
from .extractor import IntentExtractor
from .types import InboundMessage

logger = logging.getLogger("leaderboard_bot")


class BotRunner:
    """
    Connects a MessageChannel and an IntentExtractor to the store.

    Args:
        config: Config dict; missing keys take their defaults
        channel: Where messages come from and replies go
        extractor: Text to structured command
        store: Optional prebuilt RecordStore (built from config otherwise)
    """

    def __init__(
        self,
        config: Dict[str, Any],
        channel: MessageChannel,
        extractor: IntentExtractor,
        store: Optional[RecordStore] = None,
    ):
        self.config = apply_defaults(config)
        validate_config(self.config)

        self.channel = channel
        self.extractor = extractor
        self.store = store if store is not None else RecordStore(
            leaderboard_path=self.config["leaderboard_file"],
            conversation_path=self.config["chat_history_file"],
            lock_retries=self.config["lock_retries"],
        )
        self.conversation = ConversationLog(
            self.store,
            enabled=self.config["conversation_enabled"],
            context_turns=self.config["context_turns"],
        )
        self.dispatcher = Dispatcher(
            self.store,
            unknown_intent_policy=self.config["unknown_intent_policy"],
        )

        self.poll_interval = self.config["poll_interval_seconds"]
        self.max_workers = self.config["max_workers"]
        self._running = False

    def handle_message(self, message: InboundMessage) -> Optional[str]:
        """
        Process one inbound message end to end.

        Returns the reply text, or None when the bot stays silent.
        Never raises.
        """
        if message.get("is_bot"):
            logger.debug(f"Skipped automated message from {message.get('sender')}")
            return None

        text = message.get("text") or ""
        if not text.strip():
            logger.debug("Skipped message without text")
            return None

        context = self.conversation.context()
        self.conversation.record_user(text)

        try:
            command = self.extractor.extract(text, context)
        except Exception as e:
            logger.error(f"Extractor error: {e}", exc_info=True)
            command = Unrecognized(reason="extractor error")

        try:
            reply = self.dispatcher.dispatch(command)
        except Exception as e:
            logger.error(f"Dispatch error: {e}", exc_info=True)
            reply = replies.INTERNAL_ERROR

        if reply is not None:
            self.conversation.record_assistant(reply)
        return reply

    def stop(self) -> None:
        self._running = False

    def run(self) -> None:
        """Start the poll loop. Blocks until stopped or the channel closes."""
        self._running = True
        self._log_startup()
        self.channel.connect()

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            while self._running and not self.channel.closed:
                try:
                    handled = self._poll_and_process(pool)
                    if not handled and not self.channel.closed:
                        time.sleep(self.poll_interval)
                except KeyboardInterrupt:
                    break
                except Exception as e:
                    logger.error(f"Loop error: {e}", exc_info=True)
                    time.sleep(self.poll_interval)

        self.channel.disconnect()
        self._running = False
        logger.info("Bot runner stopped.")

    def _log_startup(self) -> None:
        logger.info("=" * 60)
        logger.info("  Leaderboard Bot — Starting")
        logger.info(f"  Leaderboard:  {self.store.leaderboard_path}")
        logger.info(f"  Chat history: {self.store.conversation_path} "
                    f"({'on' if self.conversation.enabled else 'off'})")
        logger.info(f"  Extractor:    {type(self.extractor).__name__}")
        logger.info(f"  Workers:      {self.max_workers}")
        logger.info("=" * 60)

    def _poll_and_process(self, pool: ThreadPoolExecutor) -> int:
        """Single poll iteration: poll → handle concurrently → send. Returns message count."""
        messages = self.channel.poll()
        pending: List[Tuple[InboundMessage, Any]] = [
            (message, pool.submit(self.handle_message, message)) for message in messages
        ]
        for message, future in pending:
            reply = future.result()
            if reply is None:
                continue
            try:
                self.channel.send(message.get("sender", ""), reply)
            except Exception as e:
                logger.error(f"Failed to send reply to {message.get('sender')}: {e}", exc_info=True)
        return len(messages)
