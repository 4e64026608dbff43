# Area: Store
"""
leaderboard_bot._store.file_lock — Exclusive per-file lock
==========================================================

A named, exclusive lock scoped to one target file. The lock itself is a
sidecar ``<target>.lock`` file held with portalocker, so independent
threads and processes on the same host exclude each other.

Acquisition is non-blocking with a bounded number of retries and capped
exponential backoff. Running out of retries raises LockAcquisitionError;
it never waits forever.

Usage:
    with FileLock("leaderboard.json", retries=5):
        ...  # exclusive access to leaderboard.json
"""

from __future__ import annotations
import logging
import time
from pathlib import Path
from typing import Callable, IO, Optional, Union

import portalocker

from ..errors import LockAcquisitionError

logger = logging.getLogger("leaderboard_bot.store.lock")

DEFAULT_RETRIES = 5
DEFAULT_BASE_DELAY = 0.1
DEFAULT_MAX_DELAY = 2.0

LOCK_SUFFIX = ".lock"


def backoff_delay(attempt: int, base_delay: float, max_delay: float) -> float:
    """Delay before retry number ``attempt`` (0-based), doubling up to max_delay."""
    return min(base_delay * (2 ** attempt), max_delay)


class FileLock:
    """
    Context manager holding an exclusive lock on ``<target>.lock``.

    One instance guards one critical section; create a fresh instance
    per operation instead of sharing one across threads.
    """

    def __init__(
        self,
        target_path: Union[str, Path],
        retries: int = DEFAULT_RETRIES,
        base_delay: float = DEFAULT_BASE_DELAY,
        max_delay: float = DEFAULT_MAX_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.target_path = Path(target_path)
        self.lock_path = self.target_path.with_name(self.target_path.name + LOCK_SUFFIX)
        self.retries = retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self._sleep = sleep
        self._handle: Optional[IO[str]] = None

    @property
    def is_held(self) -> bool:
        return self._handle is not None

    def acquire(self) -> None:
        """
        Take the lock, retrying with backoff.

        Raises:
            LockAcquisitionError: If every attempt found the lock held.
        """
        if self._handle is not None:
            raise RuntimeError(f"Lock on {self.target_path} already held by this instance")

        self.lock_path.parent.mkdir(parents=True, exist_ok=True)
        handle = open(self.lock_path, "a+", encoding="utf-8")
        attempts = self.retries + 1

        for attempt in range(attempts):
            try:
                portalocker.lock(handle, portalocker.LOCK_EX | portalocker.LOCK_NB)
            except portalocker.exceptions.LockException:
                if attempt == attempts - 1:
                    break
                delay = backoff_delay(attempt, self.base_delay, self.max_delay)
                logger.debug(
                    f"Lock on {self.target_path} busy, retry {attempt + 1}/{self.retries} in {delay:.2f}s"
                )
                self._sleep(delay)
            else:
                self._handle = handle
                return

        handle.close()
        raise LockAcquisitionError(str(self.target_path), attempts)

    def release(self) -> None:
        """Release the lock. Errors are logged, never raised."""
        handle = self._handle
        if handle is None:
            return
        self._handle = None
        try:
            portalocker.unlock(handle)
        except (portalocker.exceptions.LockException, OSError) as e:
            logger.error(f"Error unlocking {self.target_path}: {e}")
        finally:
            handle.close()

    def __enter__(self) -> "FileLock":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()
        return False
