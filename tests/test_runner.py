# Area: Runner Tests
"""Tests for BotRunner."""

import io
import os
import tempfile
from unittest.mock import Mock, patch

import pytest

from leaderboard_bot._dispatch import replies
from leaderboard_bot._dispatch.commands import RecordGame, ShowLeaderboard, UnknownIntent, Unrecognized
from leaderboard_bot.channel import ConsoleChannel, MessageChannel
from leaderboard_bot.demo_extractor import DemoIntentExtractor
from leaderboard_bot.extractor import IntentExtractor
from leaderboard_bot.runner import BotRunner


class ScriptedExtractor(IntentExtractor):
    """Returns pre-set commands keyed by message text."""

    def __init__(self, commands):
        self.commands = commands
        self.calls = []

    def extract(self, text, context=()):
        self.calls.append((text, list(context)))
        return self.commands.get(text, Unrecognized())


class ListChannel(MessageChannel):
    """Delivers one batch of messages, then closes."""

    def __init__(self, batches):
        self.batches = list(batches)
        self.sent = []
        self.connected = False
        self.disconnected = False

    def connect(self):
        self.connected = True

    def disconnect(self):
        self.disconnected = True

    @property
    def closed(self):
        return not self.batches

    def poll(self):
        return self.batches.pop(0) if self.batches else []

    def send(self, recipient, text):
        self.sent.append((recipient, text))


def user_message(text, sender="U1"):
    return {"text": text, "sender": sender, "is_bot": False}


@pytest.fixture
def config():
    with tempfile.TemporaryDirectory() as tmp:
        yield {
            "leaderboard_file": os.path.join(tmp, "leaderboard.json"),
            "chat_history_file": os.path.join(tmp, "chat_history.json"),
            "poll_interval_seconds": 1,
        }


class TestHandleMessage:
    """Tests for the per-message pipeline."""

    def test_records_game_and_conversation(self, config):
        extractor = ScriptedExtractor({
            "A beat B": RecordGame(players=["A", "B"], winner="A"),
        })
        runner = BotRunner(config, ListChannel([]), extractor)

        reply = runner.handle_message(user_message("A beat B"))

        assert reply == replies.game_recorded("A", ["A", "B"])
        assert runner.store.read_leaderboard() == {"A": 1, "B": 0}
        assert runner.store.read_conversation() == [
            {"role": "user", "content": "A beat B"},
            {"role": "assistant", "content": reply},
        ]

    def test_context_excludes_current_message(self, config):
        extractor = ScriptedExtractor({})
        runner = BotRunner(config, ListChannel([]), extractor)

        runner.handle_message(user_message("first"))
        runner.handle_message(user_message("second"))

        text, context = extractor.calls[1]
        assert text == "second"
        assert context == [
            {"role": "user", "content": "first"},
            {"role": "assistant", "content": replies.NOT_UNDERSTOOD},
        ]

    def test_bot_messages_ignored(self, config):
        extractor = Mock(spec=IntentExtractor)
        runner = BotRunner(config, ListChannel([]), extractor)

        assert runner.handle_message({"text": "A beat B", "sender": "B1", "is_bot": True}) is None
        extractor.extract.assert_not_called()
        assert runner.store.read_conversation() == []

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_empty_text_ignored(self, config, text):
        extractor = Mock(spec=IntentExtractor)
        runner = BotRunner(config, ListChannel([]), extractor)

        assert runner.handle_message({"text": text, "sender": "U1", "is_bot": False}) is None
        extractor.extract.assert_not_called()

    def test_silent_unknown_intent_records_only_user_turn(self, config):
        extractor = ScriptedExtractor({"rename": UnknownIntent(name="rename_player")})
        runner = BotRunner(config, ListChannel([]), extractor)

        assert runner.handle_message(user_message("rename")) is None
        assert runner.store.read_conversation() == [{"role": "user", "content": "rename"}]

    def test_reply_policy_from_config(self, config):
        config["unknown_intent_policy"] = "reply"
        extractor = ScriptedExtractor({"rename": UnknownIntent(name="rename_player")})
        runner = BotRunner(config, ListChannel([]), extractor)

        assert runner.handle_message(user_message("rename")) == replies.unknown_intent("rename_player")

    def test_conversation_disabled(self, config):
        config["conversation_enabled"] = False
        extractor = ScriptedExtractor({"board": ShowLeaderboard()})
        runner = BotRunner(config, ListChannel([]), extractor)

        assert runner.handle_message(user_message("board")) == replies.EMPTY_LEADERBOARD
        assert extractor.calls == [("board", [])]
        assert not os.path.exists(config["chat_history_file"])

    @pytest.mark.parametrize("error", [RuntimeError("boom"), TimeoutError("model too slow")])
    def test_extractor_crash_is_treated_as_unrecognized(self, config, error):
        extractor = Mock(spec=IntentExtractor)
        extractor.extract.side_effect = error
        runner = BotRunner(config, ListChannel([]), extractor)

        assert runner.handle_message(user_message("anything")) == replies.NOT_UNDERSTOOD
        assert runner.store.read_conversation() == [
            {"role": "user", "content": "anything"},
            {"role": "assistant", "content": replies.NOT_UNDERSTOOD},
        ]

    def test_extractor_crash_still_reaches_dispatcher(self, config):
        extractor = Mock(spec=IntentExtractor)
        extractor.extract.side_effect = RuntimeError("boom")
        runner = BotRunner(config, ListChannel([]), extractor)

        with patch.object(runner.dispatcher, "dispatch", wraps=runner.dispatcher.dispatch) as dispatch:
            runner.handle_message(user_message("anything"))

        (command,), _ = dispatch.call_args
        assert isinstance(command, Unrecognized)

    def test_dispatch_crash_gives_generic_reply(self, config):
        runner = BotRunner(config, ListChannel([]), ScriptedExtractor({"board": ShowLeaderboard()}))

        with patch.object(runner.dispatcher, "dispatch", side_effect=RuntimeError("boom")):
            assert runner.handle_message(user_message("board")) == replies.INTERNAL_ERROR

    def test_invalid_config_rejected(self, config):
        config["unknown_intent_policy"] = "loud"
        with pytest.raises(ValueError):
            BotRunner(config, ListChannel([]), ScriptedExtractor({}))


class TestRun:
    """Tests for the poll loop."""

    def test_processes_batches_and_sends_replies(self, config):
        channel = ListChannel([
            [
                user_message("Alice beat Bob", sender="U1"),
                {"text": "Alice beat Bob", "sender": "B1", "is_bot": True},
            ],
            [user_message("leaderboard", sender="U2")],
        ])
        runner = BotRunner(config, channel, DemoIntentExtractor())

        runner.run()

        assert channel.connected and channel.disconnected
        assert [recipient for recipient, _ in channel.sent] == ["U1", "U2"]
        assert channel.sent[1][1] == (
            "*Leaderboard:*\n:crown: *Alice*: 1 win\n:star: *Bob*: 0 wins"
        )

    def test_concurrent_batch_counts_every_win(self, config):
        batch = [user_message("Alice beat Bob", sender=f"U{i}") for i in range(8)]
        config["max_workers"] = 4
        config["lock_retries"] = 20
        channel = ListChannel([batch])
        runner = BotRunner(config, channel, DemoIntentExtractor())

        runner.run()

        assert len(channel.sent) == 8
        assert runner.store.read_leaderboard() == {"Alice": 8, "Bob": 0}

    def test_send_failure_does_not_stop_loop(self, config):
        channel = ListChannel([[user_message("leaderboard")], [user_message("leaderboard")]])
        calls = []

        def flaky_send(recipient, text):
            calls.append(text)
            if len(calls) == 1:
                raise ConnectionError("down")

        channel.send = flaky_send
        runner = BotRunner(config, channel, DemoIntentExtractor())

        runner.run()

        assert len(calls) == 2

    def test_console_channel_session(self, config):
        stream_in = io.StringIO("Alice won against Bob\nscores\n")
        stream_out = io.StringIO()
        channel = ConsoleChannel(stream_in, stream_out, prompt="")
        runner = BotRunner(config, channel, DemoIntentExtractor())

        runner.run()

        output = stream_out.getvalue().splitlines()
        assert output[0] == ":trophy: Game recorded! *Alice* won the game among Alice, Bob."
        assert output[1] == "*Leaderboard:*"
        assert channel.closed
