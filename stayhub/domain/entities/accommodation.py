"""Entidad Accommodation - alojamiento publicado por un anfitrión."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass
class Accommodation:
    """
    Alojamiento visto desde el motor de reservas (solo lectura).

    Attributes:
        id: Identificador del alojamiento.
        host_id: Usuario anfitrión dueño del alojamiento.
        price_per_night: Tarifa plana por noche (> 0).
        capacity: Máximo de huéspedes (>= 1).
        title: Título visible, usado en las notificaciones.
        deleted: Marca de eliminación lógica.
    """

    id: int
    host_id: int
    price_per_night: Decimal
    capacity: int
    title: str = ""
    deleted: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.price_per_night, Decimal):
            self.price_per_night = Decimal(str(self.price_per_night))
        if self.price_per_night <= 0:
            raise ValueError(f"price_per_night debe ser mayor que cero: {self.price_per_night}")
        if self.capacity < 1:
            raise ValueError(f"capacity debe ser al menos 1: {self.capacity}")

    @property
    def is_bookable(self) -> bool:
        return not self.deleted
