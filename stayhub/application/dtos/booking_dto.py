from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class AvailabilityQuote:
    """Previsualización de disponibilidad y precio (no reserva nada)."""

    accommodation_id: int
    check_in: datetime
    check_out: datetime
    available: bool
    nights: int
    nightly_rate: Decimal
    total_price: Decimal
