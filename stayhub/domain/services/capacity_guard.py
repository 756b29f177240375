"""Validación del alojamiento y de su capacidad."""

from stayhub.domain.entities.accommodation import Accommodation
from stayhub.domain.errors import AccommodationUnavailable, CapacityExceeded, ValidationError


class AccommodationCapacityGuard:
    def validate(
        self,
        accommodation: Accommodation | None,
        requested_guests: int,
        accommodation_id: int | None = None,
    ) -> None:
        """
        Valida que el alojamiento acepte reservas para la cantidad de huéspedes.

        Args:
            accommodation: Alojamiento leído del store (None si no existe).
            requested_guests: Huéspedes solicitados.
            accommodation_id: Id usado en el error cuando el alojamiento no existe.

        Raises:
            AccommodationUnavailable: Si no existe o fue eliminado.
            CapacityExceeded: Si requested_guests supera la capacidad.
            ValidationError: Si requested_guests es menor que 1.
        """
        if accommodation is None:
            raise AccommodationUnavailable(accommodation_id)
        if not accommodation.is_bookable:
            raise AccommodationUnavailable(accommodation.id)
        if requested_guests < 1:
            raise ValidationError("guest_count", "Debe haber al menos 1 huésped")
        if requested_guests > accommodation.capacity:
            raise CapacityExceeded(accommodation.id, accommodation.capacity, requested_guests)
