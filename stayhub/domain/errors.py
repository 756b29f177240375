"""Excepciones de dominio para el motor de reservas."""

from datetime import datetime


class DomainError(Exception):
    """Clase base para todos los errores de dominio."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


# === Errores de validación ===


class InvalidRange(DomainError):
    """El check-in no es anterior al check-out (o la estadía no cubre noches)."""

    def __init__(self, start: datetime, end: datetime, message: str | None = None):
        super().__init__(
            message=message
            or f"La fecha de check-in debe ser antes de la fecha de check-out: {start} >= {end}",
            code="INVALID_RANGE",
        )
        self.start = start
        self.end = end


class ValidationError(DomainError):
    """Error de validación de datos de entrada."""

    def __init__(self, field: str, message: str):
        super().__init__(
            message=f"Validación fallida en '{field}': {message}",
            code="VALIDATION_ERROR",
        )
        self.field = field


# === Errores de alojamiento ===


class CapacityExceeded(DomainError):
    """El número de huéspedes excede la capacidad del alojamiento."""

    def __init__(self, accommodation_id: int, capacity: int, requested_guests: int):
        super().__init__(
            message=(
                f"El número de huéspedes ({requested_guests}) excede la capacidad "
                f"del alojamiento {accommodation_id} ({capacity})"
            ),
            code="CAPACITY_EXCEEDED",
        )
        self.accommodation_id = accommodation_id
        self.capacity = capacity
        self.requested_guests = requested_guests


class AccommodationUnavailable(DomainError):
    """El alojamiento no existe o fue eliminado (soft delete)."""

    def __init__(self, accommodation_id: int | None):
        super().__init__(
            message=f"El alojamiento con ID {accommodation_id} no está disponible para reservas",
            code="ACCOMMODATION_UNAVAILABLE",
        )
        self.accommodation_id = accommodation_id


# === Errores de reserva ===


class DateConflict(DomainError):
    """Las fechas solicitadas se solapan con una reserva activa."""

    def __init__(self, accommodation_id: int, start: datetime, end: datetime):
        super().__init__(
            message=(
                f"Las fechas seleccionadas no están disponibles para el alojamiento "
                f"{accommodation_id}: {start.isoformat()} -> {end.isoformat()}"
            ),
            code="DATE_CONFLICT",
        )
        self.accommodation_id = accommodation_id
        self.start = start
        self.end = end


class IllegalTransition(DomainError):
    """El estado actual de la reserva no permite el cambio solicitado."""

    def __init__(self, reservation_id: int | None, current_status: str, requested_status: str):
        super().__init__(
            message=(
                f"No se puede cambiar la reserva {reservation_id} de "
                f"'{current_status}' a '{requested_status}'"
            ),
            code="ILLEGAL_TRANSITION",
        )
        self.reservation_id = reservation_id
        self.current_status = current_status
        self.requested_status = requested_status


class AuthorizationError(DomainError):
    """El actor no tiene el rol o la propiedad necesarios para la operación."""

    def __init__(self, message: str, actor_id: int | None = None):
        super().__init__(message=message, code="AUTHORIZATION_ERROR")
        self.actor_id = actor_id


class NotFound(DomainError):
    """La entidad solicitada (reserva, alojamiento o usuario) no existe."""

    def __init__(self, entity: str, identifier: object):
        super().__init__(
            message=f"{entity} con ID {identifier} no existe",
            code="NOT_FOUND",
        )
        self.entity = entity
        self.identifier = identifier


# === Errores de concurrencia ===


class BookingTimeout(DomainError):
    """No se obtuvo el lock del alojamiento dentro del tiempo límite."""

    def __init__(self, accommodation_id: int, timeout_seconds: float):
        super().__init__(
            message=(
                f"Timeout de {timeout_seconds}s esperando el lock del alojamiento "
                f"{accommodation_id}; intente nuevamente"
            ),
            code="BOOKING_TIMEOUT",
        )
        self.accommodation_id = accommodation_id
        self.timeout_seconds = timeout_seconds


class Conflict(DomainError):
    """Se agotaron los reintentos ante inserciones concurrentes."""

    def __init__(self, accommodation_id: int, attempts: int):
        super().__init__(
            message=(
                f"Conflicto de concurrencia en el alojamiento {accommodation_id} "
                f"después de {attempts} intentos"
            ),
            code="CONFLICT",
        )
        self.accommodation_id = accommodation_id
        self.attempts = attempts
