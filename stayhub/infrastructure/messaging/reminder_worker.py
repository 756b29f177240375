"""Worker que dispara los recordatorios de check-in una vez al día."""

import asyncio
import logging
from datetime import date, datetime
from uuid import uuid4

from stayhub.application.interfaces.clock import Clock
from stayhub.application.use_cases.send_check_in_reminders import SendCheckInRemindersUseCase

logger = logging.getLogger(__name__)


class ReminderWorker:
    """
    Ejecuta SendCheckInRemindersUseCase a la hora configurada (UTC).

    Recuerda el último día procesado para no duplicar recordatorios si el
    ciclo despierta varias veces dentro de la misma hora.
    """

    def __init__(
        self,
        use_case: SendCheckInRemindersUseCase,
        clock: Clock,
        run_at_hour: int = 9,
        poll_interval_seconds: float = 60.0,
        worker_id: str | None = None,
    ) -> None:
        if not 0 <= run_at_hour <= 23:
            raise ValueError("run_at_hour must be between 0 and 23")
        self._use_case = use_case
        self._clock = clock
        self._run_at_hour = run_at_hour
        self._poll_interval = poll_interval_seconds
        self._worker_id = worker_id or f"reminders-{uuid4().hex[:8]}"
        self._last_run: date | None = None
        self._running = False

    @property
    def worker_id(self) -> str:
        return self._worker_id

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def last_run(self) -> date | None:
        return self._last_run

    def is_due(self, now: datetime) -> bool:
        return now.hour >= self._run_at_hour and self._last_run != now.date()

    async def run_once(self) -> int:
        """
        Ejecuta un ciclo si corresponde.

        Returns:
            Número de reservas recordadas (0 si no correspondía ejecutar).
        """
        now = self._clock.now()
        if not self.is_due(now):
            return 0
        reminded = await self._use_case.execute(now.date())
        self._last_run = now.date()
        return reminded

    async def start(self) -> None:
        """Inicia el worker en modo polling."""
        self._running = True
        logger.info(f"ReminderWorker {self._worker_id} iniciado")

        while self._running:
            try:
                await self.run_once()
            except Exception as e:
                logger.exception(f"Error en ciclo del worker: {e}")
            await asyncio.sleep(self._poll_interval)

    async def stop(self) -> None:
        """Detiene el worker de forma graceful."""
        self._running = False
        logger.info(f"ReminderWorker {self._worker_id} detenido")
