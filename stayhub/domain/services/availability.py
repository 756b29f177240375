"""Chequeo de disponibilidad por solapamiento de intervalos."""

from collections.abc import Iterable
from datetime import datetime

from stayhub.domain.entities.reservation import Reservation
from stayhub.domain.value_objects.stay_period import StayPeriod


class AvailabilityChecker:
    """
    Determina si una estadía candidata se solapa con reservas activas.

    Es una función pura: no hace I/O ni guarda estado, por lo que puede usarse
    fuera de la sección crítica para previsualizaciones. La verificación que
    acepta una reserva siempre se repite dentro de la sección crítica.
    """

    def find_conflict(
        self,
        accommodation_id: int,
        candidate_start: datetime,
        candidate_end: datetime,
        existing_active_reservations: Iterable[Reservation],
    ) -> Reservation | None:
        """
        Retorna la primera reserva activa que se solapa, o None.

        Raises:
            InvalidRange: Si candidate_start no es anterior a candidate_end.
        """
        candidate = StayPeriod(candidate_start, candidate_end)

        for existing in existing_active_reservations:
            if existing.accommodation_id != accommodation_id or not existing.is_active:
                continue
            if candidate.overlaps_with(existing.period):
                return existing
        return None

    def is_available(
        self,
        accommodation_id: int,
        candidate_start: datetime,
        candidate_end: datetime,
        existing_active_reservations: Iterable[Reservation],
    ) -> bool:
        return (
            self.find_conflict(
                accommodation_id,
                candidate_start,
                candidate_end,
                existing_active_reservations,
            )
            is None
        )
