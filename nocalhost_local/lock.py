"""A single process wide lock for exclusive commands.

Commands that mutate the cluster (install, uninstall, entering or leaving a
dev space) must not interleave, regardless of which application or workload
they target. The lock does not queue: a caller that can't acquire it is
rejected and may retry later.

Acquisition is a plain check-and-set with no suspension point, so it is atomic
with respect to other tasks on the same event loop.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
import logging

from .exceptions import TaskRunningError

_LOGGER = logging.getLogger(__name__)

__all__ = ["CommandLock"]


class CommandLock:
    """Mutual exclusion flag for exclusive commands."""

    def __init__(self) -> None:
        """Initialize CommandLock."""
        self._running = False

    def is_running(self) -> bool:
        """Return True if an exclusive command currently holds the lock."""
        return self._running

    def try_acquire(self) -> bool:
        """Acquire the lock, returning False if it is already held."""
        if self._running:
            return False
        self._running = True
        return True

    def release(self) -> None:
        """Release the lock unconditionally."""
        self._running = False

    @asynccontextmanager
    async def hold(self, command: str | None = None) -> AsyncGenerator[None, None]:
        """Hold the lock for the duration of the block.

        Raises TaskRunningError if the lock is already held.
        """
        if not self.try_acquire():
            raise TaskRunningError(command)
        _LOGGER.debug("Lock acquired by %s", command)
        try:
            yield
        finally:
            self.release()
            _LOGGER.debug("Lock released by %s", command)
