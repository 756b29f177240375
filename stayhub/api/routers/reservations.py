from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from stayhub.api.dependencies import get_current_user, get_use_cases
from stayhub.api.schemas.reservations import (
    AvailabilityResponse,
    CreateReservationRequest,
    ReservationResponse,
    UpdateStatusRequest,
    to_local_wall_time,
)
from stayhub.domain.entities.reservation import ReservationStatus
from stayhub.domain.entities.user import User

router = APIRouter()


@router.post(
    "/reservations",
    response_model=ReservationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_reservation(
    payload: CreateReservationRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    use_cases: Annotated[dict, Depends(get_use_cases)],
) -> ReservationResponse:
    reservation = await use_cases["booking"].create_reservation(
        guest_id=current_user.id,
        accommodation_id=payload.accommodation_id,
        check_in=payload.check_in,
        check_out=payload.check_out,
        guest_count=payload.guest_count,
    )
    return ReservationResponse.model_validate(reservation)


@router.get("/reservations", response_model=list[ReservationResponse])
async def list_my_reservations(
    current_user: Annotated[User, Depends(get_current_user)],
    use_cases: Annotated[dict, Depends(get_use_cases)],
    status_filter: ReservationStatus | None = Query(default=None, alias="status"),
) -> list[ReservationResponse]:
    reservations = await use_cases["queries"].list_for_guest(current_user.id, status_filter)
    return [ReservationResponse.model_validate(r) for r in reservations]


@router.get("/reservations/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(
    reservation_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    use_cases: Annotated[dict, Depends(get_use_cases)],
) -> ReservationResponse:
    reservation = await use_cases["queries"].get_reservation(reservation_id, current_user.id)
    return ReservationResponse.model_validate(reservation)


@router.patch("/reservations/{reservation_id}/status", response_model=ReservationResponse)
async def update_reservation_status(
    reservation_id: int,
    payload: UpdateStatusRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    use_cases: Annotated[dict, Depends(get_use_cases)],
) -> ReservationResponse:
    reservation = await use_cases["booking"].update_status(
        reservation_id, payload.status, actor_id=current_user.id
    )
    return ReservationResponse.model_validate(reservation)


@router.delete("/reservations/{reservation_id}", response_model=ReservationResponse)
async def cancel_reservation(
    reservation_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    use_cases: Annotated[dict, Depends(get_use_cases)],
) -> ReservationResponse:
    """Cancela la reserva (eliminación lógica); nunca se borra la fila."""
    reservation = await use_cases["booking"].update_status(
        reservation_id, ReservationStatus.CANCELLED, actor_id=current_user.id
    )
    return ReservationResponse.model_validate(reservation)


@router.get(
    "/accommodations/{accommodation_id}/reservations",
    response_model=list[ReservationResponse],
)
async def list_accommodation_reservations(
    accommodation_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    use_cases: Annotated[dict, Depends(get_use_cases)],
    status_filter: ReservationStatus | None = Query(default=None, alias="status"),
) -> list[ReservationResponse]:
    reservations = await use_cases["queries"].list_for_accommodation(
        accommodation_id, current_user.id, status_filter
    )
    return [ReservationResponse.model_validate(r) for r in reservations]


@router.get(
    "/accommodations/{accommodation_id}/availability",
    response_model=AvailabilityResponse,
)
async def check_availability(
    accommodation_id: int,
    use_cases: Annotated[dict, Depends(get_use_cases)],
    check_in: datetime = Query(...),
    check_out: datetime = Query(...),
) -> AvailabilityResponse:
    quote = await use_cases["booking"].check_availability(
        accommodation_id, to_local_wall_time(check_in), to_local_wall_time(check_out)
    )
    return AvailabilityResponse.model_validate(quote)
