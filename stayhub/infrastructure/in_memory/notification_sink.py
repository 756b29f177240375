from dataclasses import replace
from itertools import count

from stayhub.application.interfaces.notification_dispatcher import NotificationSink
from stayhub.domain.entities.notification import Notification, NotificationType


class InMemoryNotificationSink(NotificationSink):
    def __init__(self) -> None:
        self.delivered: list[Notification] = []
        self._ids = count(1)

    async def deliver(self, notification: Notification) -> None:
        self.delivered.append(replace(notification, id=next(self._ids)))

    def for_user(self, user_id: int) -> list[Notification]:
        return [n for n in self.delivered if n.user_id == user_id]

    def of_type(self, event_type: NotificationType) -> list[Notification]:
        return [n for n in self.delivered if n.type == event_type]
