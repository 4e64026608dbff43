# Area: Dispatch
"""
leaderboard_bot._dispatch.replies — User-facing reply texts
===========================================================

Builds every message the dispatcher sends back. Formatting uses Slack
style markup (``*bold*`` and ``:emoji:`` codes).
"""

from typing import List, Tuple

from ..types import Leaderboard

EMPTY_LEADERBOARD = "The leaderboard is currently empty."
MISSING_PLAYERS_OR_WINNER = "Sorry, I couldn't find the players or winner in your request."
SAVE_FAILED = "Sorry, I couldn't save that game. Please try again."
NOT_UNDERSTOOD = "Sorry, I couldn't understand that request."
INTERNAL_ERROR = "Sorry, something went wrong while handling that message."

LEADER_MARKER = ":crown:"
PLAYER_MARKER = ":star:"


def ranked_entries(leaderboard: Leaderboard) -> List[Tuple[str, int]]:
    """Entries by wins descending; ties keep their stored order."""
    return sorted(leaderboard.items(), key=lambda item: item[1], reverse=True)


def format_wins(wins: int) -> str:
    return f"{wins} win{'' if wins == 1 else 's'}"


def render_leaderboard(leaderboard: Leaderboard) -> str:
    """Leaderboard text with every entry tied at the top marked as leader."""
    if not leaderboard:
        return EMPTY_LEADERBOARD

    ranked = ranked_entries(leaderboard)
    highest = ranked[0][1]
    lines = [
        f"{LEADER_MARKER if wins == highest else PLAYER_MARKER} *{player}*: {format_wins(wins)}"
        for player, wins in ranked
    ]
    return "*Leaderboard:*\n" + "\n".join(lines)


def winner_not_in_players(winner: str, players: List[str]) -> str:
    return f"The winner *{winner}* is not among the list of players: {', '.join(players)}."


def game_recorded(winner: str, players: List[str]) -> str:
    return f":trophy: Game recorded! *{winner}* won the game among {', '.join(players)}."


def unknown_intent(name: str) -> str:
    return f"Sorry, I didn't understand the intent '{name}'."
