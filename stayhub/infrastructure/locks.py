"""
Per-accommodation critical sections for the booking coordinator.

One asyncio.Lock is handed out per accommodation id, so bookings for
different accommodations never wait on each other. Acquisition is bounded
by a timeout; callers that exceed it get BookingTimeout and may retry.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from stayhub.application.interfaces.accommodation_lock import AccommodationLockManager
from stayhub.domain.errors import BookingTimeout

logger = logging.getLogger(__name__)


class InProcessAccommodationLocks(AccommodationLockManager):
    """
    Keyed mutex registry living in the current process and event loop.

    Entries are reference counted and dropped once nobody holds or waits on
    them, so the registry does not grow with the number of accommodations.
    Cross-process exclusion is the storage layer's job (row locks in the SQL
    store).
    """

    def __init__(self, timeout_seconds: float = 5.0) -> None:
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")
        self._timeout = timeout_seconds
        self._locks: dict[int, asyncio.Lock] = {}
        self._users: dict[int, int] = {}

    @property
    def timeout_seconds(self) -> float:
        return self._timeout

    @property
    def tracked_accommodations(self) -> int:
        """Number of accommodations with a live lock entry."""
        return len(self._locks)

    def is_locked(self, accommodation_id: int) -> bool:
        lock = self._locks.get(accommodation_id)
        return lock is not None and lock.locked()

    @asynccontextmanager
    async def hold(self, accommodation_id: int) -> AsyncIterator[None]:
        lock = self._locks.get(accommodation_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[accommodation_id] = lock
        self._users[accommodation_id] = self._users.get(accommodation_id, 0) + 1

        try:
            try:
                await asyncio.wait_for(lock.acquire(), timeout=self._timeout)
            except asyncio.TimeoutError:
                logger.warning(
                    "Timed out waiting for accommodation lock",
                    extra={
                        "accommodation_id": accommodation_id,
                        "timeout_seconds": self._timeout,
                    },
                )
                raise BookingTimeout(accommodation_id, self._timeout) from None

            try:
                yield
            finally:
                lock.release()
        finally:
            self._users[accommodation_id] -= 1
            if self._users[accommodation_id] == 0:
                del self._users[accommodation_id]
                del self._locks[accommodation_id]
