"""
leaderboard_bot.errors — Custom exception classes
==================================================

Defines the exception hierarchy for storage and extraction failures.
Each exception stores full context for structured logging.

None of these are fatal to the process: the Record Store absorbs storage
errors and the extractor maps its own failures to an unrecognized command.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import json


class LeaderboardBotError(Exception):
    """Base exception for all leaderboard_bot errors."""
    pass


class LockAcquisitionError(LeaderboardBotError):
    """Raised when a file lock cannot be acquired within the retry budget."""

    def __init__(self, path: str, attempts: int):
        self.path = path
        self.attempts = attempts
        super().__init__(
            f"Could not lock '{path}' after {attempts} attempts"
        )

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="LOCK_ACQUISITION_FAILED",
            source=self.path,
            details={"attempts": self.attempts},
            problems=None,
        )


class StoreCorruptError(LeaderboardBotError):
    """Raised when a persisted document does not have the expected shape."""

    def __init__(self, path: str, problems: List[str]):
        self.path = path
        self.problems = problems
        super().__init__(f"Corrupt document at '{path}': {problems}")

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="STORE_CORRUPT",
            source=self.path,
            details=None,
            problems=self.problems,
        )


class ExtractionError(LeaderboardBotError):
    """Raised inside an extractor when the model response is unusable."""

    def __init__(self, detail: str, raw_output: Any = None):
        self.detail = detail
        self.raw_output = raw_output
        super().__init__(f"Intent extraction failed: {detail}")

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="EXTRACTION_FAILED",
            source="intent_extractor",
            details={"raw_output": repr(self.raw_output)},
            problems=[self.detail],
        )


def _format_error_block(
    error_type: str,
    source: str,
    details: Optional[Dict[str, Any]],
    problems: Optional[List[str]],
) -> str:
    """Format a structured error block for the log."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        f" {error_type}",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Source:       {source}",
    ]

    if details is not None:
        lines.append("")
        lines.append(" ── DETAILS " + "─" * 52)
        lines.append(_indent_json(details))

    if problems:
        lines.append("")
        lines.append(" ── PROBLEMS " + "─" * 51)
        for problem in problems:
            lines.append(f" • {problem}")

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def _indent_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
