"""Entidad Reservation - Agregado raíz del motor de reservas."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from stayhub.domain.value_objects.stay_period import StayPeriod


class ReservationStatus(str, Enum):
    """Estados posibles de una reservación."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


ACTIVE_STATUSES = frozenset({ReservationStatus.PENDING, ReservationStatus.CONFIRMED})
TERMINAL_STATUSES = frozenset({ReservationStatus.CANCELLED, ReservationStatus.COMPLETED})


@dataclass
class Reservation:
    """
    Reserva de un huésped sobre un alojamiento.

    Solo guarda ids de huésped y alojamiento; el anfitrión se resuelve a través
    del alojamiento cuando se necesita.
    """

    guest_id: int
    accommodation_id: int
    check_in: datetime
    check_out: datetime
    guest_count: int
    total_price: Decimal = Decimal("0.00")
    status: ReservationStatus = ReservationStatus.PENDING
    deleted: bool = False
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def period(self) -> StayPeriod:
        return StayPeriod(start=self.check_in, end=self.check_out)

    @property
    def is_active(self) -> bool:
        """Una reserva activa bloquea sus fechas: PENDING o CONFIRMED y no eliminada."""
        return self.status in ACTIVE_STATUSES and not self.deleted

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES
