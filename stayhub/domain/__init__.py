"""
Capa de Dominio - Motor de reservas de StayHub.

Esta capa contiene la lógica de negocio pura, sin dependencias de frameworks.

Estructura:
- entities/: Entidades del dominio (Reservation, Accommodation, User, Notification)
- value_objects/: Objetos de valor inmutables (StayPeriod)
- services/: Reglas puras (disponibilidad, precio, capacidad, máquina de estados)
- errors.py: Excepciones específicas del dominio
"""

from stayhub.domain.entities import (
    ACTIVE_STATUSES,
    TERMINAL_STATUSES,
    Accommodation,
    Notification,
    NotificationStatus,
    NotificationType,
    Reservation,
    ReservationStatus,
    Role,
    User,
)
from stayhub.domain.errors import (
    AccommodationUnavailable,
    AuthorizationError,
    BookingTimeout,
    CapacityExceeded,
    Conflict,
    DateConflict,
    DomainError,
    IllegalTransition,
    InvalidRange,
    NotFound,
    ValidationError,
)
from stayhub.domain.value_objects import StayPeriod

__all__ = [
    # Entities
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
    # Value Objects
    "StayPeriod",
    # Errors
    "DomainError",
    "InvalidRange",
    "ValidationError",
    "CapacityExceeded",
    "AccommodationUnavailable",
    "DateConflict",
    "IllegalTransition",
    "AuthorizationError",
    "NotFound",
    "BookingTimeout",
    "Conflict",
]
