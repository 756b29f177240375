"""Interfaces (Puertos) de la capa de aplicación."""

from stayhub.application.interfaces.accommodation_lock import AccommodationLockManager
from stayhub.application.interfaces.clock import Clock, FakeClock, SystemClock
from stayhub.application.interfaces.notification_dispatcher import (
    NotificationDispatcher,
    NotificationSink,
)
from stayhub.application.interfaces.persistence_store import (
    ConflictPredicate,
    ConflictSignal,
    PersistenceStore,
)
from stayhub.application.interfaces.user_directory import UserDirectory

__all__ = [
    # Storage
    "PersistenceStore",
    "ConflictPredicate",
    "ConflictSignal",
    "UserDirectory",
    # Messaging
    "NotificationDispatcher",
    "NotificationSink",
    # Concurrency
    "AccommodationLockManager",
    # Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
]
