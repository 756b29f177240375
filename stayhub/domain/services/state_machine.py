"""Máquina de estados de la reserva con autorización por transición."""

from dataclasses import replace
from datetime import datetime
from enum import Enum

from stayhub.domain.entities.reservation import Reservation, ReservationStatus
from stayhub.domain.errors import AuthorizationError, IllegalTransition

# Actor usado por procesos automáticos (ids de usuario empiezan en 1)
SYSTEM_ACTOR_ID = 0


class TransitionActor(str, Enum):
    """Rol del actor respecto a una reserva concreta."""

    GUEST = "GUEST"
    HOST = "HOST"
    SYSTEM = "SYSTEM"
    OTHER = "OTHER"


# (estado actual, estado solicitado) -> actores autorizados
TRANSITIONS: dict[tuple[ReservationStatus, ReservationStatus], frozenset[TransitionActor]] = {
    (ReservationStatus.PENDING, ReservationStatus.CONFIRMED): frozenset(
        {TransitionActor.HOST, TransitionActor.SYSTEM}
    ),
    (ReservationStatus.PENDING, ReservationStatus.CANCELLED): frozenset(
        {TransitionActor.GUEST, TransitionActor.HOST}
    ),
    (ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED): frozenset(
        {TransitionActor.GUEST, TransitionActor.HOST}
    ),
    (ReservationStatus.CONFIRMED, ReservationStatus.COMPLETED): frozenset(
        {TransitionActor.HOST, TransitionActor.SYSTEM}
    ),
}


class ReservationStateMachine:
    """
    Aplica transiciones de estado sin hacer I/O.

    Las transiciones ilegales se rechazan antes que la autorización, de modo que
    cancelar dos veces siempre resulta en IllegalTransition.
    """

    @staticmethod
    def can_transition(current: ReservationStatus, requested: ReservationStatus) -> bool:
        return (current, requested) in TRANSITIONS

    @staticmethod
    def actor_role(reservation: Reservation, actor_id: int, host_id: int) -> TransitionActor:
        if actor_id == SYSTEM_ACTOR_ID:
            return TransitionActor.SYSTEM
        if actor_id == host_id:
            return TransitionActor.HOST
        if actor_id == reservation.guest_id:
            return TransitionActor.GUEST
        return TransitionActor.OTHER

    def is_allowed(
        self,
        current: ReservationStatus,
        requested: ReservationStatus,
        actor: TransitionActor,
    ) -> bool:
        return actor in TRANSITIONS.get((current, requested), frozenset())

    def apply(
        self,
        reservation: Reservation,
        requested: ReservationStatus,
        actor_id: int,
        host_id: int,
        now: datetime | None = None,
    ) -> Reservation:
        """
        Retorna una copia de la reserva en el estado solicitado.

        Raises:
            IllegalTransition: Si la transición no existe en la tabla.
            AuthorizationError: Si el actor no puede solicitarla.
        """
        requested = ReservationStatus(requested)
        if not self.can_transition(reservation.status, requested):
            raise IllegalTransition(reservation.id, reservation.status.value, requested.value)

        actor = self.actor_role(reservation, actor_id, host_id)
        if not self.is_allowed(reservation.status, requested, actor):
            raise AuthorizationError(
                f"No tienes permiso para cambiar la reserva {reservation.id} a {requested.value}",
                actor_id=actor_id,
            )

        return replace(
            reservation,
            status=requested,
            deleted=reservation.deleted or requested == ReservationStatus.CANCELLED,
            updated_at=now or reservation.updated_at,
        )
