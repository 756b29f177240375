from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Protocol


class AccommodationLockManager(Protocol):
    """
    Sección crítica por alojamiento.

    hold() debe adquirirse con timeout acotado y lanzar BookingTimeout si se
    excede; alojamientos distintos nunca se bloquean entre sí.
    """

    @asynccontextmanager
    async def hold(self, accommodation_id: int) -> AsyncIterator[None]:
        yield
