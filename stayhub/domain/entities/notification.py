"""Entidad Notification - evento del ciclo de vida enviado a un usuario."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class NotificationType(str, Enum):
    """Tipos de notificación que emite el motor de reservas."""

    RESERVATION_CREATED = "RESERVATION_CREATED"
    RESERVATION_REQUESTED = "RESERVATION_REQUESTED"
    RESERVATION_CONFIRMED = "RESERVATION_CONFIRMED"
    RESERVATION_UPDATED = "RESERVATION_UPDATED"
    RESERVATION_CANCELLED = "RESERVATION_CANCELLED"
    REMINDER = "REMINDER"


class NotificationStatus(str, Enum):
    READ = "READ"
    UNREAD = "UNREAD"


@dataclass
class Notification:
    user_id: int
    type: NotificationType
    message: str
    payload: dict[str, Any] = field(default_factory=dict)
    status: NotificationStatus = NotificationStatus.UNREAD
    id: int | None = None
    created_at: datetime | None = None
