from sqlalchemy import insert

from stayhub.application.interfaces.notification_dispatcher import NotificationSink
from stayhub.domain.entities.notification import Notification
from stayhub.infrastructure.db.engine import session_scope
from stayhub.infrastructure.db.repositories._datetimes import to_db
from stayhub.infrastructure.db.tables import notifications


class NotificationSinkSQL(NotificationSink):
    """Persiste la notificación en la tabla notifications (bandeja del usuario)."""

    def __init__(self, session_maker) -> None:
        self._session_maker = session_maker

    async def deliver(self, notification: Notification) -> None:
        stmt = insert(notifications).values(
            user_id=notification.user_id,
            type=notification.type.value,
            message=notification.message,
            payload=notification.payload,
            status=notification.status.value,
            created_at=to_db(notification.created_at),
        )
        async with session_scope(self._session_maker) as session:
            await session.execute(stmt)
