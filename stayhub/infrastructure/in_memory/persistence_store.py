from dataclasses import replace
from datetime import date
from itertools import count

from stayhub.application.interfaces.persistence_store import (
    ConflictPredicate,
    ConflictSignal,
    PersistenceStore,
)
from stayhub.domain.entities.accommodation import Accommodation
from stayhub.domain.entities.reservation import Reservation


class InMemoryPersistenceStore(PersistenceStore):
    """
    Store en memoria para desarrollo y tests.

    insert_reservation_if_no_conflict no cede el event loop entre la relectura
    y la escritura, por lo que es atómico frente a otras corrutinas. Se
    entregan copias para que los llamadores no muten el estado interno.
    """

    def __init__(self) -> None:
        self.accommodations: dict[int, Accommodation] = {}
        self.reservations: dict[int, Reservation] = {}
        self._ids = count(1)

    # === Helpers de preparación ===

    def add_accommodation(self, accommodation: Accommodation) -> Accommodation:
        self.accommodations[accommodation.id] = replace(accommodation)
        return accommodation

    def soft_delete_accommodation(self, accommodation_id: int) -> None:
        if accommodation_id not in self.accommodations:
            raise ValueError("Accommodation not found")
        self.accommodations[accommodation_id].deleted = True

    # === PersistenceStore ===

    async def find_accommodation(self, accommodation_id: int) -> Accommodation | None:
        accommodation = self.accommodations.get(accommodation_id)
        return replace(accommodation) if accommodation else None

    async def active_reservations_for(self, accommodation_id: int) -> list[Reservation]:
        return self._active_for(accommodation_id)

    async def insert_reservation_if_no_conflict(
        self,
        reservation: Reservation,
        conflict_predicate: ConflictPredicate,
    ) -> Reservation | ConflictSignal:
        active = self._active_for(reservation.accommodation_id)
        if conflict_predicate(active):
            return ConflictSignal(
                accommodation_id=reservation.accommodation_id,
                conflicting_reservation_ids=tuple(r.id for r in active if r.id is not None),
            )
        stored = replace(reservation, id=next(self._ids))
        self.reservations[stored.id] = stored
        return replace(stored)

    async def save(self, reservation: Reservation) -> Reservation:
        if reservation.id is None or reservation.id not in self.reservations:
            raise ValueError("Reservation not found")
        self.reservations[reservation.id] = replace(reservation)
        return replace(reservation)

    async def find_reservation(self, reservation_id: int) -> Reservation | None:
        reservation = self.reservations.get(reservation_id)
        return replace(reservation) if reservation else None

    async def reservations_for_guest(self, guest_id: int) -> list[Reservation]:
        return [replace(r) for r in self.reservations.values() if r.guest_id == guest_id]

    async def reservations_for_accommodation(self, accommodation_id: int) -> list[Reservation]:
        return [
            replace(r) for r in self.reservations.values() if r.accommodation_id == accommodation_id
        ]

    async def active_reservations_checking_in(self, day: date) -> list[Reservation]:
        return [
            replace(r)
            for r in self.reservations.values()
            if r.is_active and r.check_in.date() == day
        ]

    def _active_for(self, accommodation_id: int) -> list[Reservation]:
        return [
            replace(r)
            for r in self.reservations.values()
            if r.accommodation_id == accommodation_id and r.is_active
        ]
