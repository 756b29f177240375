"""Casos de uso del motor de reservas."""

from stayhub.application.use_cases.booking_coordinator import BookingCoordinator
from stayhub.application.use_cases.reservation_queries import ReservationQueries
from stayhub.application.use_cases.send_check_in_reminders import SendCheckInRemindersUseCase

__all__ = [
    "BookingCoordinator",
    "ReservationQueries",
    "SendCheckInRemindersUseCase",
]
