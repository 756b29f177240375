"""Data Transfer Objects de la capa de aplicación."""

from stayhub.application.dtos.booking_dto import AvailabilityQuote

__all__ = [
    "AvailabilityQuote",
]
