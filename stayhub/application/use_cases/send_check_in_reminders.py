import logging
from datetime import date, timedelta

from stayhub.application.interfaces.clock import Clock, SystemClock
from stayhub.application.interfaces.notification_dispatcher import NotificationDispatcher
from stayhub.application.interfaces.persistence_store import PersistenceStore
from stayhub.domain.entities.notification import NotificationType

logger = logging.getLogger(__name__)


class SendCheckInRemindersUseCase:
    """Avisa al huésped y al anfitrión de las llegadas del día siguiente."""

    def __init__(
        self,
        store: PersistenceStore,
        notifier: NotificationDispatcher,
        clock: Clock | None = None,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._clock = clock or SystemClock()

    async def execute(self, today: date | None = None) -> int:
        """
        Envía recordatorios para las reservas activas con check-in mañana.

        Returns:
            Número de reservas recordadas.
        """
        tomorrow = (today or self._clock.today()) + timedelta(days=1)
        upcoming = await self._store.active_reservations_checking_in(tomorrow)

        reminded = 0
        for reservation in upcoming:
            accommodation = await self._store.find_accommodation(reservation.accommodation_id)
            if accommodation is None:
                logger.warning(
                    "Skipping reminder for reservation without accommodation",
                    extra={"reservation_id": reservation.id},
                )
                continue
            title = accommodation.title or f"alojamiento {accommodation.id}"
            payload = {
                "reservation_id": reservation.id,
                "accommodation_id": accommodation.id,
                "check_in": reservation.check_in.isoformat(),
            }
            self._notifier.notify(
                reservation.guest_id,
                NotificationType.REMINDER,
                {
                    **payload,
                    "message": (
                        f"Le recordamos que su check-in para el alojamiento {title} "
                        f"está programado para el {reservation.check_in.date().isoformat()}."
                    ),
                },
            )
            self._notifier.notify(
                accommodation.host_id,
                NotificationType.REMINDER,
                {**payload, "message": f"Un huésped llegará mañana a su alojamiento {title}."},
            )
            reminded += 1

        logger.info(
            "Check-in reminders sent",
            extra={"check_in_date": tomorrow.isoformat(), "reservations": reminded},
        )
        return reminded
