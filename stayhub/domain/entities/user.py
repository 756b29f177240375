"""Entidad User - huésped o anfitrión."""

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """Roles de usuario dentro de la plataforma."""

    GUEST = "GUEST"
    HOST = "HOST"


@dataclass(frozen=True)
class User:
    id: int
    email: str
    role: Role
    name: str = ""

    @property
    def can_book(self) -> bool:
        return self.role == Role.GUEST
