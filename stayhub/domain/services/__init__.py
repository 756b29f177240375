"""Servicios de dominio puros del motor de reservas."""

from stayhub.domain.services.availability import AvailabilityChecker
from stayhub.domain.services.capacity_guard import AccommodationCapacityGuard
from stayhub.domain.services.pricing import PricingCalculator
from stayhub.domain.services.state_machine import (
    SYSTEM_ACTOR_ID,
    ReservationStateMachine,
    TransitionActor,
)

__all__ = [
    "SYSTEM_ACTOR_ID",
    "AccommodationCapacityGuard",
    "AvailabilityChecker",
    "PricingCalculator",
    "ReservationStateMachine",
    "TransitionActor",
]
