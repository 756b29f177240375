import logging

from stayhub.application.interfaces.persistence_store import PersistenceStore
from stayhub.domain.entities.reservation import Reservation, ReservationStatus
from stayhub.domain.errors import AuthorizationError, NotFound

logger = logging.getLogger(__name__)


class ReservationQueries:
    """Consultas de lectura sobre reservas, con control de acceso por participante."""

    def __init__(self, store: PersistenceStore) -> None:
        self._store = store

    async def get_reservation(self, reservation_id: int, actor_id: int) -> Reservation:
        """
        Retorna la reserva si el actor es su huésped o el anfitrión del alojamiento.

        Las reservas canceladas siguen siendo visibles para sus participantes.
        """
        reservation = await self._store.find_reservation(reservation_id)
        if reservation is None:
            raise NotFound("Reserva", reservation_id)

        accommodation = await self._store.find_accommodation(reservation.accommodation_id)
        host_id = accommodation.host_id if accommodation else None
        if actor_id not in (reservation.guest_id, host_id):
            logger.warning(
                "User attempted to access reservation they don't own",
                extra={"reservation_id": reservation_id, "actor_id": actor_id},
            )
            raise AuthorizationError("No tienes permiso para ver esta reserva", actor_id=actor_id)
        return reservation

    async def list_for_guest(
        self,
        guest_id: int,
        status: ReservationStatus | str | None = None,
    ) -> list[Reservation]:
        reservations = await self._store.reservations_for_guest(guest_id)
        return self._filter(reservations, status)

    async def list_for_accommodation(
        self,
        accommodation_id: int,
        actor_id: int,
        status: ReservationStatus | str | None = None,
    ) -> list[Reservation]:
        accommodation = await self._store.find_accommodation(accommodation_id)
        if accommodation is None:
            raise NotFound("Alojamiento", accommodation_id)
        if accommodation.host_id != actor_id:
            logger.warning(
                "User attempted to access reservations for accommodation they don't own",
                extra={"accommodation_id": accommodation_id, "actor_id": actor_id},
            )
            raise AuthorizationError(
                "No tienes permiso para ver las reservas de este alojamiento",
                actor_id=actor_id,
            )
        reservations = await self._store.reservations_for_accommodation(accommodation_id)
        return self._filter(reservations, status)

    @staticmethod
    def _filter(
        reservations: list[Reservation],
        status: ReservationStatus | str | None,
    ) -> list[Reservation]:
        visible = [r for r in reservations if not r.deleted]
        if status is not None:
            wanted = ReservationStatus(status)
            visible = [r for r in visible if r.status == wanted]
        return sorted(visible, key=lambda r: (r.check_in, r.id or 0))
