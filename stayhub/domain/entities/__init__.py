"""Entidades del dominio de reservas."""

from stayhub.domain.entities.accommodation import Accommodation
from stayhub.domain.entities.notification import (
    Notification,
    NotificationStatus,
    NotificationType,
)
from stayhub.domain.entities.reservation import (
    ACTIVE_STATUSES,
    TERMINAL_STATUSES,
    Reservation,
    ReservationStatus,
)
from stayhub.domain.entities.user import Role, User

__all__ = [
    "ACTIVE_STATUSES",
    "TERMINAL_STATUSES",
    "Accommodation",
    "Notification",
    "NotificationStatus",
    "NotificationType",
    "Reservation",
    "ReservationStatus",
    "Role",
    "User",
]
