# Area: Dispatch Tests
"""Tests for Command Router."""

from unittest.mock import Mock, patch

from leaderboard_bot._dispatch.commands import CommandKind, RecordGame, ShowLeaderboard
from leaderboard_bot._dispatch.router import CommandRouter


class TestCommandRouter:
    """Tests for CommandRouter class."""

    def test_routes_to_correct_handler(self):
        router = CommandRouter()
        mock_handler = Mock()
        mock_handler.handle.return_value = "shown"
        router.register_handler(CommandKind.SHOW_LEADERBOARD, mock_handler)

        command = ShowLeaderboard()
        result = router.route(command)

        mock_handler.handle.assert_called_once_with(command)
        assert result == "shown"

    def test_returns_none_for_unregistered_kind(self):
        router = CommandRouter()
        with patch("leaderboard_bot._dispatch.router.logger") as mock_logger:
            assert router.route(ShowLeaderboard()) is None
            mock_logger.warning.assert_called_once()

    def test_register_multiple_handlers(self):
        router = CommandRouter()
        show = Mock()
        show.handle.return_value = "board"
        record = Mock()
        record.handle.return_value = "recorded"

        router.register_handler(CommandKind.SHOW_LEADERBOARD, show)
        router.register_handler(CommandKind.RECORD_GAME, record)

        assert router.route(ShowLeaderboard()) == "board"
        assert router.route(RecordGame(players=["A"], winner="A")) == "recorded"
        show.handle.assert_called_once()
        record.handle.assert_called_once()

    def test_get_handler(self):
        router = CommandRouter()
        handler = Mock()
        router.register_handler(CommandKind.RECORD_GAME, handler)
        assert router.get_handler(CommandKind.RECORD_GAME) is handler
        assert router.get_handler(CommandKind.SHOW_LEADERBOARD) is None

    def test_later_registration_replaces_earlier(self):
        router = CommandRouter()
        first, second = Mock(), Mock()
        second.handle.return_value = "second"
        router.register_handler(CommandKind.SHOW_LEADERBOARD, first)
        router.register_handler(CommandKind.SHOW_LEADERBOARD, second)

        assert router.route(ShowLeaderboard()) == "second"
        first.handle.assert_not_called()
