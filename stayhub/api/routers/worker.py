from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from stayhub.api.dependencies import get_use_cases
from stayhub.api.schemas.reservations import ReminderRunResponse

router = APIRouter()


@router.post(
    "/workers/reminders/check-in",
    response_model=ReminderRunResponse,
    status_code=status.HTTP_200_OK,
)
async def run_check_in_reminders(
    use_cases: Annotated[dict, Depends(get_use_cases)],
    today: date | None = Query(default=None),
) -> ReminderRunResponse:
    """
    Dispara manualmente los recordatorios de check-in.

    El ReminderWorker hace lo mismo de forma periódica cuando está habilitado.
    """
    reminded = await use_cases["reminders"].execute(today)
    return ReminderRunResponse(reminded=reminded)
