"""Puertos de notificación: despacho asíncrono y entrega final."""

from typing import Any

from stayhub.domain.entities.notification import Notification, NotificationType


class NotificationSink:
    """Destino final de una notificación (tabla, e-mail, push...)."""

    async def deliver(self, notification: Notification) -> None:
        raise NotImplementedError


class NotificationDispatcher:
    """
    Puerto de despacho fire-and-forget.

    notify() nunca bloquea al llamador ni propaga errores de entrega; los fallos
    se registran en el log del colaborador.
    """

    def notify(
        self,
        user_id: int,
        event_type: NotificationType,
        payload: dict[str, Any],
    ) -> None:
        raise NotImplementedError

    async def drain(self) -> None:
        """Espera las entregas pendientes (apagado ordenado y tests)."""
        raise NotImplementedError
