import asyncio

import pytest

from stayhub.domain.errors import BookingTimeout
from stayhub.infrastructure.locks import InProcessAccommodationLocks


class TestInProcessAccommodationLocks:
    @pytest.mark.asyncio
    async def test_same_accommodation_is_serialized(self):
        locks = InProcessAccommodationLocks(timeout_seconds=1.0)
        events: list[str] = []

        async def worker(name: str):
            async with locks.hold(1):
                events.append(f"{name}-in")
                await asyncio.sleep(0.01)
                events.append(f"{name}-out")

        await asyncio.gather(worker("a"), worker("b"))
        assert events in (
            ["a-in", "a-out", "b-in", "b-out"],
            ["b-in", "b-out", "a-in", "a-out"],
        )

    @pytest.mark.asyncio
    async def test_different_accommodations_run_in_parallel(self):
        locks = InProcessAccommodationLocks(timeout_seconds=0.05)

        async with locks.hold(1):
            async with locks.hold(2):
                assert locks.is_locked(1)
                assert locks.is_locked(2)

    @pytest.mark.asyncio
    async def test_timeout_raises_booking_timeout(self):
        locks = InProcessAccommodationLocks(timeout_seconds=0.05)

        async with locks.hold(7):
            with pytest.raises(BookingTimeout) as exc_info:
                async with locks.hold(7):
                    pass
        assert exc_info.value.accommodation_id == 7
        assert exc_info.value.timeout_seconds == 0.05

    @pytest.mark.asyncio
    async def test_registry_entries_are_released(self):
        locks = InProcessAccommodationLocks(timeout_seconds=0.05)

        async with locks.hold(1):
            assert locks.tracked_accommodations == 1
            with pytest.raises(BookingTimeout):
                async with locks.hold(1):
                    pass
            assert locks.tracked_accommodations == 1
        assert locks.tracked_accommodations == 0
        assert not locks.is_locked(1)

    @pytest.mark.asyncio
    async def test_lock_released_when_body_raises(self):
        locks = InProcessAccommodationLocks(timeout_seconds=0.05)

        with pytest.raises(RuntimeError):
            async with locks.hold(3):
                raise RuntimeError("boom")
        async with locks.hold(3):
            assert locks.is_locked(3)

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValueError):
            InProcessAccommodationLocks(timeout_seconds=0)
