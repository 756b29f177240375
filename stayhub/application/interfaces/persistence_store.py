from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date

from stayhub.domain.entities.accommodation import Accommodation
from stayhub.domain.entities.reservation import Reservation

# Recibe las reservas activas leídas dentro de la operación atómica y
# retorna True si la reserva candidata entra en conflicto con alguna.
ConflictPredicate = Callable[[Sequence[Reservation]], bool]


@dataclass(frozen=True)
class ConflictSignal:
    """El store rechazó la inserción: otra escritura concurrente ocupó el intervalo."""

    accommodation_id: int
    conflicting_reservation_ids: tuple[int, ...] = ()


class PersistenceStore:
    async def find_accommodation(self, accommodation_id: int) -> Accommodation | None:
        """Retorna el alojamiento aunque esté eliminado; la guarda decide."""
        raise NotImplementedError

    async def active_reservations_for(self, accommodation_id: int) -> list[Reservation]:
        """Reservas PENDING/CONFIRMED no eliminadas del alojamiento."""
        raise NotImplementedError

    async def insert_reservation_if_no_conflict(
        self,
        reservation: Reservation,
        conflict_predicate: ConflictPredicate,
    ) -> Reservation | ConflictSignal:
        """
        Inserta la reserva de forma atómica con la relectura del conjunto activo.

        Ninguna otra escritura puede pasar el mismo chequeo sin que esta inserción
        le sea visible.
        """
        raise NotImplementedError

    async def save(self, reservation: Reservation) -> Reservation:
        raise NotImplementedError

    async def find_reservation(self, reservation_id: int) -> Reservation | None:
        raise NotImplementedError

    async def reservations_for_guest(self, guest_id: int) -> list[Reservation]:
        raise NotImplementedError

    async def reservations_for_accommodation(self, accommodation_id: int) -> list[Reservation]:
        raise NotImplementedError

    async def active_reservations_checking_in(self, day: date) -> list[Reservation]:
        raise NotImplementedError
