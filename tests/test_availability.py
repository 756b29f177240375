from datetime import datetime

import pytest

from stayhub.domain.entities.reservation import Reservation, ReservationStatus
from stayhub.domain.errors import InvalidRange
from stayhub.domain.services.availability import AvailabilityChecker
from stayhub.domain.value_objects import StayPeriod

ACCOMMODATION_ID = 10


def _d(day: int) -> datetime:
    return datetime(2025, 6, day)


def _reservation(start: int, end: int, status=ReservationStatus.PENDING, deleted=False, accommodation_id=ACCOMMODATION_ID):
    return Reservation(
        id=start * 100 + end,
        guest_id=2,
        accommodation_id=accommodation_id,
        check_in=_d(start),
        check_out=_d(end),
        guest_count=1,
        status=status,
        deleted=deleted,
    )


@pytest.fixture
def checker():
    return AvailabilityChecker()


class TestOverlap:
    """Intervalos semiabiertos [check_in, check_out)"""

    def test_back_to_back_is_not_a_conflict(self, checker):
        existing = [_reservation(10, 15)]
        assert checker.find_conflict(ACCOMMODATION_ID, _d(15), _d(20), existing) is None

    def test_partial_overlap_is_a_conflict(self, checker):
        existing = [_reservation(10, 15)]
        conflict = checker.find_conflict(ACCOMMODATION_ID, _d(14), _d(20), existing)
        assert conflict is existing[0]

    def test_identical_interval_is_a_conflict(self, checker):
        existing = [_reservation(10, 15)]
        assert not checker.is_available(ACCOMMODATION_ID, _d(10), _d(15), existing)

    def test_candidate_containing_existing_is_a_conflict(self, checker):
        existing = [_reservation(11, 12)]
        assert not checker.is_available(ACCOMMODATION_ID, _d(10), _d(15), existing)

    def test_candidate_ending_at_existing_start_is_free(self, checker):
        existing = [_reservation(10, 15)]
        assert checker.is_available(ACCOMMODATION_ID, _d(5), _d(10), existing)


class TestInactiveReservations:
    @pytest.mark.parametrize(
        "status,deleted",
        [
            (ReservationStatus.CANCELLED, True),
            (ReservationStatus.COMPLETED, False),
            (ReservationStatus.PENDING, True),
        ],
    )
    def test_inactive_reservations_do_not_block(self, checker, status, deleted):
        existing = [_reservation(10, 15, status=status, deleted=deleted)]
        assert checker.is_available(ACCOMMODATION_ID, _d(10), _d(15), existing)

    def test_confirmed_reservation_blocks(self, checker):
        existing = [_reservation(10, 15, status=ReservationStatus.CONFIRMED)]
        assert not checker.is_available(ACCOMMODATION_ID, _d(12), _d(13), existing)

    def test_other_accommodation_does_not_block(self, checker):
        existing = [_reservation(10, 15, accommodation_id=99)]
        assert checker.is_available(ACCOMMODATION_ID, _d(10), _d(15), existing)


class TestInvalidRange:
    def test_start_equal_to_end_is_rejected(self, checker):
        with pytest.raises(InvalidRange):
            checker.find_conflict(ACCOMMODATION_ID, _d(10), _d(10), [])

    def test_start_after_end_is_rejected(self, checker):
        with pytest.raises(InvalidRange) as exc_info:
            checker.is_available(ACCOMMODATION_ID, _d(12), _d(10), [])
        assert exc_info.value.code == "INVALID_RANGE"


class TestStayPeriod:
    def test_nights_and_overlap(self):
        period = StayPeriod(_d(10), _d(15))
        assert period.nights == 5
        assert period.overlaps_with(StayPeriod(_d(14), _d(20)))
        assert not period.overlaps_with(StayPeriod(_d(15), _d(20)))

    def test_reservation_period_uses_its_dates(self):
        assert _reservation(10, 15).period == StayPeriod(_d(10), _d(15))

    def test_empty_period_is_rejected(self):
        with pytest.raises(InvalidRange):
            StayPeriod(_d(10), _d(10))
