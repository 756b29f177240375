"""Value Object StayPeriod - rango de check-in / check-out de una estadía."""

from dataclasses import dataclass
from datetime import datetime

from stayhub.domain.errors import InvalidRange


@dataclass(frozen=True)
class StayPeriod:
    """
    Value Object inmutable que representa una estadía como intervalo semiabierto.

    El intervalo es [start, end): el día de check-out de un huésped puede ser
    el día de check-in del siguiente.

    Attributes:
        start: Fecha/hora de check-in.
        end: Fecha/hora de check-out.
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise InvalidRange(self.start, self.end)

    @property
    def nights(self) -> int:
        """
        Noches facturables: diferencia en días de calendario.

        Una estadía fraccionada se factura por los días de calendario que cubre,
        sin importar la hora de llegada o salida.
        """
        return (self.end.date() - self.start.date()).days

    def overlaps_with(self, other: "StayPeriod") -> bool:
        """Verifica si este rango se superpone con otro (los bordes no cuentan)."""
        return self.start < other.end and other.start < self.end

    def __str__(self) -> str:
        return f"{self.start.isoformat()} -> {self.end.isoformat()}"
