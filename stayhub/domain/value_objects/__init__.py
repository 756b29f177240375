"""Value Objects del dominio de reservas."""

from stayhub.domain.value_objects.stay_period import StayPeriod

__all__ = [
    "StayPeriod",
]
