"""Datos de demostración: los mismos que carga scripts/seed_db.py."""

from decimal import Decimal

from stayhub.domain.entities.accommodation import Accommodation
from stayhub.domain.entities.user import Role, User
from stayhub.infrastructure.in_memory.persistence_store import InMemoryPersistenceStore
from stayhub.infrastructure.in_memory.user_directory import InMemoryUserDirectory

DEMO_GUESTS = 20

DEMO_USERS = [User(id=1, email="host@stayhub.dev", role=Role.HOST, name="Demo Host")] + [
    User(id=i + 1, email=f"guest{i}@stayhub.dev", role=Role.GUEST, name=f"Guest {i}")
    for i in range(1, DEMO_GUESTS + 1)
]

DEMO_ACCOMMODATIONS = [
    Accommodation(id=1, host_id=1, price_per_night=Decimal("100.00"), capacity=2, title="Cabaña en el lago"),
    Accommodation(id=2, host_id=1, price_per_night=Decimal("75.50"), capacity=4, title="Departamento céntrico"),
    Accommodation(id=3, host_id=1, price_per_night=Decimal("210.00"), capacity=8, title="Casa de playa"),
]


def seed_demo_data(store: InMemoryPersistenceStore, user_directory: InMemoryUserDirectory) -> None:
    for user in DEMO_USERS:
        user_directory.add_user(user)
    for accommodation in DEMO_ACCOMMODATIONS:
        store.add_accommodation(accommodation)
