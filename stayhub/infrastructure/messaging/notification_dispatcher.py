"""Despachador de notificaciones en segundo plano."""

import asyncio
import logging
from typing import Any

from pybreaker import CircuitBreaker, CircuitBreakerError

from stayhub.application.interfaces.clock import Clock, SystemClock
from stayhub.application.interfaces.notification_dispatcher import (
    NotificationDispatcher,
    NotificationSink,
)
from stayhub.domain.entities.notification import Notification, NotificationType
from stayhub.infrastructure.circuit_breaker import notification_breaker

logger = logging.getLogger(__name__)


class BackgroundNotificationDispatcher(NotificationDispatcher):
    """
    Entrega notificaciones en tareas independientes del request.

    Características:
    - notify() retorna de inmediato; la entrega corre en su propia tarea
    - Backoff exponencial en reintentos
    - Circuit breaker para no insistir contra un sink caído
    - drain() para apagado ordenado
    """

    def __init__(
        self,
        sink: NotificationSink,
        clock: Clock | None = None,
        max_attempts: int = 3,
        base_delay: float = 0.5,
        breaker: CircuitBreaker | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self._sink = sink
        self._clock = clock or SystemClock()
        self._max_attempts = max_attempts
        self._base_delay = base_delay
        self._breaker = breaker or notification_breaker
        self._pending: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Número de entregas en curso."""
        return len(self._pending)

    def notify(
        self,
        user_id: int,
        event_type: NotificationType,
        payload: dict[str, Any],
    ) -> None:
        notification = Notification(
            user_id=user_id,
            type=NotificationType(event_type),
            message=str(payload.get("message", "")),
            payload=dict(payload),
            created_at=self._clock.now(),
        )
        task = asyncio.get_running_loop().create_task(self._deliver(notification))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _deliver(self, notification: Notification) -> None:
        for attempt in range(self._max_attempts):
            try:
                with self._breaker.calling():
                    await self._sink.deliver(notification)
                return
            except CircuitBreakerError:
                logger.error(
                    "Notification dropped: circuit breaker open",
                    extra={"user_id": notification.user_id, "type": notification.type.value},
                )
                return
            except Exception as e:
                if attempt < self._max_attempts - 1:
                    delay = self._base_delay * (2 ** attempt)
                    logger.warning(
                        "Notification delivery failed, retrying",
                        extra={
                            "user_id": notification.user_id,
                            "type": notification.type.value,
                            "attempt": attempt + 1,
                            "max_attempts": self._max_attempts,
                            "retry_delay": delay,
                            "error": str(e),
                        },
                    )
                    await asyncio.sleep(delay)
                else:
                    logger.error(
                        "Notification delivery failed after max retries",
                        extra={
                            "user_id": notification.user_id,
                            "type": notification.type.value,
                            "attempts": self._max_attempts,
                            "error": str(e),
                        },
                    )
