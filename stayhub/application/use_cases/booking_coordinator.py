import asyncio
import logging
from collections.abc import Awaitable, Sequence
from datetime import datetime
from typing import Any, TypeVar

from stayhub.application.dtos.booking_dto import AvailabilityQuote
from stayhub.application.interfaces.accommodation_lock import AccommodationLockManager
from stayhub.application.interfaces.clock import Clock, SystemClock
from stayhub.application.interfaces.notification_dispatcher import NotificationDispatcher
from stayhub.application.interfaces.persistence_store import ConflictSignal, PersistenceStore
from stayhub.application.interfaces.user_directory import UserDirectory
from stayhub.domain.entities.accommodation import Accommodation
from stayhub.domain.entities.notification import NotificationType
from stayhub.domain.entities.reservation import Reservation, ReservationStatus
from stayhub.domain.errors import (
    AccommodationUnavailable,
    AuthorizationError,
    Conflict,
    DateConflict,
    InvalidRange,
    NotFound,
)
from stayhub.domain.services.availability import AvailabilityChecker
from stayhub.domain.services.capacity_guard import AccommodationCapacityGuard
from stayhub.domain.services.pricing import PricingCalculator
from stayhub.domain.services.state_machine import ReservationStateMachine

logger = logging.getLogger(__name__)

T = TypeVar("T")

_STATUS_NOTIFICATION = {
    ReservationStatus.CONFIRMED: NotificationType.RESERVATION_CONFIRMED,
    ReservationStatus.CANCELLED: NotificationType.RESERVATION_CANCELLED,
    ReservationStatus.COMPLETED: NotificationType.RESERVATION_UPDATED,
}


def _consume_outcome(task: asyncio.Task) -> None:
    # El llamador pudo haberse desconectado; el resultado queda solo en el log
    if not task.cancelled() and task.exception() is not None:
        logger.debug("Booking task finished with error", exc_info=task.exception())


class BookingCoordinator:
    """
    Orquesta la creación y el ciclo de vida de las reservas.

    Toda secuencia chequeo-de-disponibilidad-y-escritura se ejecuta dentro de la
    sección crítica del alojamiento (AccommodationLockManager). El store vuelve
    a verificar el solapamiento dentro de su propia operación atómica; si
    detecta una escritura concurrente retorna ConflictSignal y la secuencia se
    repite hasta max_attempts veces.
    """

    def __init__(
        self,
        store: PersistenceStore,
        user_directory: UserDirectory,
        notifier: NotificationDispatcher,
        lock_manager: AccommodationLockManager,
        clock: Clock | None = None,
        max_attempts: int = 3,
        availability_checker: AvailabilityChecker | None = None,
        pricing_calculator: PricingCalculator | None = None,
        capacity_guard: AccommodationCapacityGuard | None = None,
        state_machine: ReservationStateMachine | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self._store = store
        self._user_directory = user_directory
        self._notifier = notifier
        self._locks = lock_manager
        self._clock = clock or SystemClock()
        self._max_attempts = max_attempts
        self._availability = availability_checker or AvailabilityChecker()
        self._pricing = pricing_calculator or PricingCalculator()
        self._capacity_guard = capacity_guard or AccommodationCapacityGuard()
        self._state_machine = state_machine or ReservationStateMachine()

    # === Operaciones públicas ===

    async def create_reservation(
        self,
        guest_id: int,
        accommodation_id: int,
        check_in: datetime,
        check_out: datetime,
        guest_count: int,
    ) -> Reservation:
        """
        Crea una reserva PENDING si las fechas están libres.

        Raises:
            NotFound: Huésped o alojamiento inexistente.
            AuthorizationError: El usuario no tiene rol GUEST.
            AccommodationUnavailable: Alojamiento eliminado.
            CapacityExceeded: guest_count supera la capacidad.
            InvalidRange: check_in >= check_out o estadía sin noches.
            DateConflict: Las fechas se solapan con una reserva activa.
            BookingTimeout: No se obtuvo el lock a tiempo.
            Conflict: Se agotaron los reintentos ante escrituras concurrentes.
        """
        logger.info(
            "Creating reservation",
            extra={
                "guest_id": guest_id,
                "accommodation_id": accommodation_id,
                "check_in": check_in.isoformat(),
                "check_out": check_out.isoformat(),
            },
        )
        guest = await self._user_directory.find_by_id(guest_id)
        if guest is None:
            raise NotFound("Usuario", guest_id)
        if not guest.can_book:
            logger.warning("User is not a guest", extra={"user_id": guest_id})
            raise AuthorizationError("Solo los huéspedes pueden crear reservas", actor_id=guest_id)

        accommodation = await self._store.find_accommodation(accommodation_id)
        if accommodation is None:
            raise NotFound("Alojamiento", accommodation_id)
        self._capacity_guard.validate(accommodation, guest_count, accommodation_id)

        if check_in >= check_out:
            raise InvalidRange(check_in, check_out)
        # Falla rápido si la estadía no cubre noches, antes de tomar el lock
        self._pricing.compute_total(accommodation.price_per_night, check_in, check_out)

        reservation = await self._run_to_completion(
            self._book_and_notify(guest_id, accommodation_id, check_in, check_out, guest_count)
        )
        return reservation

    async def update_status(
        self,
        reservation_id: int,
        requested_status: ReservationStatus | str,
        actor_id: int,
    ) -> Reservation:
        """
        Aplica una transición de estado y la persiste.

        Raises:
            NotFound: Reserva o alojamiento inexistente.
            IllegalTransition: La máquina de estados rechaza el cambio.
            AuthorizationError: El actor no puede solicitar el cambio.
            BookingTimeout: No se obtuvo el lock a tiempo.
        """
        requested = ReservationStatus(requested_status)
        logger.info(
            "Updating reservation status",
            extra={
                "reservation_id": reservation_id,
                "requested_status": requested.value,
                "actor_id": actor_id,
            },
        )
        reservation = await self._store.find_reservation(reservation_id)
        if reservation is None:
            raise NotFound("Reserva", reservation_id)

        return await self._run_to_completion(
            self._transition_and_notify(reservation.accommodation_id, reservation_id, requested, actor_id)
        )

    async def check_availability(
        self,
        accommodation_id: int,
        check_in: datetime,
        check_out: datetime,
    ) -> AvailabilityQuote:
        """
        Previsualiza disponibilidad y precio sin tomar el lock ni escribir.

        El resultado es orientativo: solo create_reservation decide de forma
        autoritativa.
        """
        accommodation = await self._store.find_accommodation(accommodation_id)
        if accommodation is None:
            raise NotFound("Alojamiento", accommodation_id)
        if not accommodation.is_bookable:
            raise AccommodationUnavailable(accommodation_id)

        active = await self._store.active_reservations_for(accommodation_id)
        available = self._availability.is_available(accommodation_id, check_in, check_out, active)
        total = self._pricing.compute_total(accommodation.price_per_night, check_in, check_out)
        return AvailabilityQuote(
            accommodation_id=accommodation_id,
            check_in=check_in,
            check_out=check_out,
            available=available,
            nights=self._pricing.nights(check_in, check_out),
            nightly_rate=accommodation.price_per_night,
            total_price=total,
        )

    # === Sección crítica ===

    async def _run_to_completion(self, coro: Awaitable[T]) -> T:
        """
        Ejecuta la sección crítica protegida de la cancelación del llamador.

        Si el cliente se desconecta, la tarea termina igual; una reserva ya
        confirmada en el store no se revierte.
        """
        task = asyncio.ensure_future(coro)
        task.add_done_callback(_consume_outcome)
        return await asyncio.shield(task)

    async def _book_and_notify(
        self,
        guest_id: int,
        accommodation_id: int,
        check_in: datetime,
        check_out: datetime,
        guest_count: int,
    ) -> Reservation:
        async with self._locks.hold(accommodation_id):
            reservation, accommodation = await self._book_locked(
                guest_id, accommodation_id, check_in, check_out, guest_count
            )

        logger.info(
            "Reservation created",
            extra={
                "reservation_id": reservation.id,
                "accommodation_id": accommodation_id,
                "total_price": str(reservation.total_price),
            },
        )
        self._notify_created(reservation, accommodation)
        return reservation

    async def _book_locked(
        self,
        guest_id: int,
        accommodation_id: int,
        check_in: datetime,
        check_out: datetime,
        guest_count: int,
    ) -> tuple[Reservation, Accommodation]:
        def conflicts(existing: Sequence[Reservation]) -> bool:
            return not self._availability.is_available(accommodation_id, check_in, check_out, existing)

        for attempt in range(1, self._max_attempts + 1):
            # Se relee el alojamiento: capacidad o eliminación pudieron cambiar
            accommodation = await self._store.find_accommodation(accommodation_id)
            self._capacity_guard.validate(accommodation, guest_count, accommodation_id)

            active = await self._store.active_reservations_for(accommodation_id)
            conflict = self._availability.find_conflict(accommodation_id, check_in, check_out, active)
            if conflict is not None:
                logger.info(
                    "Reservation rejected: dates overlap an active reservation",
                    extra={
                        "accommodation_id": accommodation_id,
                        "conflicting_reservation_id": conflict.id,
                    },
                )
                raise DateConflict(accommodation_id, check_in, check_out)

            total = self._pricing.compute_total(accommodation.price_per_night, check_in, check_out)
            now = self._clock.now()
            candidate = Reservation(
                guest_id=guest_id,
                accommodation_id=accommodation_id,
                check_in=check_in,
                check_out=check_out,
                guest_count=guest_count,
                total_price=total,
                status=ReservationStatus.PENDING,
                deleted=False,
                created_at=now,
                updated_at=now,
            )

            result = await self._store.insert_reservation_if_no_conflict(candidate, conflicts)
            if isinstance(result, ConflictSignal):
                logger.warning(
                    "Concurrent reservation detected by store, retrying",
                    extra={
                        "accommodation_id": accommodation_id,
                        "attempt": attempt,
                        "max_attempts": self._max_attempts,
                        "conflicting_reservation_ids": list(result.conflicting_reservation_ids),
                    },
                )
                continue
            return result, accommodation

        logger.error(
            "Reservation retries exhausted",
            extra={"accommodation_id": accommodation_id, "attempts": self._max_attempts},
        )
        raise Conflict(accommodation_id, self._max_attempts)

    async def _transition_and_notify(
        self,
        accommodation_id: int,
        reservation_id: int,
        requested: ReservationStatus,
        actor_id: int,
    ) -> Reservation:
        async with self._locks.hold(accommodation_id):
            reservation = await self._store.find_reservation(reservation_id)
            if reservation is None:
                raise NotFound("Reserva", reservation_id)
            accommodation = await self._store.find_accommodation(reservation.accommodation_id)
            if accommodation is None:
                raise NotFound("Alojamiento", reservation.accommodation_id)

            updated = self._state_machine.apply(
                reservation,
                requested,
                actor_id=actor_id,
                host_id=accommodation.host_id,
                now=self._clock.now(),
            )
            saved = await self._store.save(updated)

        logger.info(
            "Reservation status updated",
            extra={
                "reservation_id": reservation_id,
                "from_status": reservation.status.value,
                "to_status": saved.status.value,
            },
        )
        self._notify_transition(saved, accommodation)
        return saved

    # === Notificaciones ===

    @staticmethod
    def _payload(reservation: Reservation, message: str) -> dict[str, Any]:
        return {
            "reservation_id": reservation.id,
            "accommodation_id": reservation.accommodation_id,
            "status": reservation.status.value,
            "check_in": reservation.check_in.isoformat(),
            "check_out": reservation.check_out.isoformat(),
            "message": message,
        }

    def _notify_created(self, reservation: Reservation, accommodation: Accommodation) -> None:
        title = accommodation.title or f"alojamiento {accommodation.id}"
        self._notifier.notify(
            reservation.guest_id,
            NotificationType.RESERVATION_CREATED,
            self._payload(reservation, f"Tu reserva para {title} ha sido creada exitosamente!"),
        )
        self._notifier.notify(
            accommodation.host_id,
            NotificationType.RESERVATION_REQUESTED,
            self._payload(
                reservation,
                f"Se ha recibido una nueva solicitud de reserva para {title}!",
            ),
        )

    def _notify_transition(self, reservation: Reservation, accommodation: Accommodation) -> None:
        title = accommodation.title or f"alojamiento {accommodation.id}"
        event_type = _STATUS_NOTIFICATION[reservation.status]
        status = reservation.status.value
        self._notifier.notify(
            reservation.guest_id,
            event_type,
            self._payload(reservation, f"Tu reserva para {title} ha sido actualizada a {status}!"),
        )
        self._notifier.notify(
            accommodation.host_id,
            event_type,
            self._payload(reservation, f"La reserva para {title} ha sido actualizada a {status}!"),
        )
