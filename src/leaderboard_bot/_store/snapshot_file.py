# Area: Store
"""
leaderboard_bot._store.snapshot_file — Locked JSON snapshot file
================================================================

One JSON document on disk, always replaced whole. Every read and write
runs under the file's FileLock, and writes go through a temp file in the
same directory followed by an atomic rename, so readers never see a
partially written document.

Errors propagate from this layer; RecordStore decides what to absorb.
"""

from __future__ import annotations
import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Union

from .file_lock import DEFAULT_RETRIES, FileLock

logger = logging.getLogger("leaderboard_bot.store.file")


class SnapshotFile:
    """
    A single-file JSON snapshot with locked read/write/update cycles.

    Args:
        path: Location of the JSON document
        default_factory: Produces the value returned when the file is absent
        lock_retries: Retry budget passed to FileLock
    """

    def __init__(
        self,
        path: Union[str, Path],
        default_factory: Callable[[], Any],
        lock_retries: int = DEFAULT_RETRIES,
    ):
        self.path = Path(path)
        self.default_factory = default_factory
        self.lock_retries = lock_retries

    def _lock(self) -> FileLock:
        return FileLock(self.path, retries=self.lock_retries)

    def read(self) -> Any:
        """Read the document. Absent file yields ``default_factory()``."""
        with self._lock():
            return self._read_unlocked()

    def write(self, data: Any) -> None:
        """Replace the document with ``data``."""
        with self._lock():
            self._write_unlocked(data)

    def update(self, fn: Callable[[Any], Any]) -> Any:
        """
        Read, transform and write back inside one critical section.

        ``fn`` receives the current document (or the default) and returns
        the new one. A document that is not valid JSON is handed to ``fn``
        as the default and overwritten. Returns what was written.
        """
        with self._lock():
            try:
                current = self._read_unlocked()
            except ValueError as e:
                logger.warning(f"Replacing unparseable snapshot {self.path}: {e}")
                current = self.default_factory()
            updated = fn(current)
            self._write_unlocked(updated)
            return updated

    def _read_unlocked(self) -> Any:
        if not self.path.exists():
            return self.default_factory()
        with open(self.path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _write_unlocked(self, data: Any) -> None:
        payload = json.dumps(data, indent=2, ensure_ascii=False)
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(
            dir=str(directory), prefix=f".{self.path.name}.", suffix=".tmp"
        )
        fd_owned = True
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                fd_owned = False  # closed by the file object from here on
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            Path(tmp_path).replace(self.path)
        except BaseException:
            if fd_owned:
                with contextlib.suppress(OSError):
                    os.close(fd)
            with contextlib.suppress(OSError):
                Path(tmp_path).unlink()
            raise
        logger.debug(f"Wrote snapshot {self.path} ({len(payload)} bytes)")
