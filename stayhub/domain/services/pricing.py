"""Cálculo del precio total de una estadía."""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from stayhub.domain.errors import InvalidRange
from stayhub.domain.value_objects.stay_period import StayPeriod

CENTS = Decimal("0.01")


class PricingCalculator:
    """Tarifa plana: noches × precio por noche."""

    @staticmethod
    def nights(start: datetime, end: datetime) -> int:
        """
        Diferencia en días de calendario entre check-in y check-out.

        Raises:
            InvalidRange: Si start no es anterior a end.
        """
        return StayPeriod(start, end).nights

    def compute_total(self, nightly_rate: Decimal, start: datetime, end: datetime) -> Decimal:
        """
        Calcula el total de la estadía.

        Raises:
            InvalidRange: Si la estadía no cubre al menos una noche.
        """
        nights = self.nights(start, end)
        if nights <= 0:
            raise InvalidRange(
                start,
                end,
                message=f"La estadía debe cubrir al menos una noche: {start} -> {end}",
            )
        total = Decimal(str(nightly_rate)) * nights
        return total.quantize(CENTS, rounding=ROUND_HALF_UP)
