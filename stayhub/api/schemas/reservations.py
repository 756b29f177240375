from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_validator

from stayhub.domain.entities.reservation import ReservationStatus


def to_local_wall_time(value: datetime) -> datetime:
    """
    Fechas de check-in/check-out en hora local del alojamiento.

    Se descarta el offset sin convertir a UTC: las noches se cuentan sobre las
    fechas de calendario que envió el huésped.
    """
    if value.tzinfo is None:
        return value
    return value.replace(tzinfo=None)


class CreateReservationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    accommodation_id: int
    check_in: datetime
    check_out: datetime
    guest_count: int

    @field_validator("check_in", "check_out")
    @classmethod
    def normalize_datetime(cls, v: datetime) -> datetime:
        return to_local_wall_time(v)


class UpdateStatusRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: ReservationStatus


class ReservationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    guest_id: int
    accommodation_id: int
    check_in: datetime
    check_out: datetime
    guest_count: int
    total_price: Decimal
    status: ReservationStatus
    deleted: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AvailabilityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    accommodation_id: int
    check_in: datetime
    check_out: datetime
    available: bool
    nights: int
    nightly_rate: Decimal
    total_price: Decimal


class ReminderRunResponse(BaseModel):
    reminded: int
