"""
Pytest configuration and shared fixtures.

Este módulo provee fixtures reutilizables para:
- Adaptadores en memoria (store, directorio de usuarios, sink de notificaciones)
- Reloj fijo para pruebas deterministas
- Coordinador de reservas ya cableado
- Cliente HTTP async contra la app FastAPI
"""

from datetime import datetime, timezone
from decimal import Decimal

import httpx
import pytest
import pytest_asyncio

from stayhub.api.dependencies import get_bundle
from stayhub.application.interfaces.clock import FakeClock
from stayhub.application.use_cases.booking_coordinator import BookingCoordinator
from stayhub.domain.entities.accommodation import Accommodation
from stayhub.domain.entities.user import Role, User
from stayhub.infrastructure.circuit_breaker import build_notification_breaker, notification_breaker
from stayhub.infrastructure.in_memory import (
    InMemoryNotificationSink,
    InMemoryPersistenceStore,
    InMemoryUserDirectory,
)
from stayhub.infrastructure.locks import InProcessAccommodationLocks
from stayhub.infrastructure.messaging.notification_dispatcher import (
    BackgroundNotificationDispatcher,
)
from stayhub.main import app

HOST_ID = 1
GUEST_ID = 2
OTHER_GUEST_ID = 3
OTHER_HOST_ID = 4
ACCOMMODATION_ID = 10

HOST_EMAIL = "host@stayhub.dev"
GUEST_EMAIL = "guest@stayhub.dev"
OTHER_GUEST_EMAIL = "other.guest@stayhub.dev"
OTHER_HOST_EMAIL = "other.host@stayhub.dev"


def day(month: int, d: int, hour: int = 0) -> datetime:
    """Fecha naive de 2025, el formato que guarda el store."""
    return datetime(2025, month, d, hour)


# ============================================================================
# FIXTURES DE DOMINIO E INFRAESTRUCTURA EN MEMORIA
# ============================================================================

@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 5, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def accommodation():
    return Accommodation(
        id=ACCOMMODATION_ID,
        host_id=HOST_ID,
        price_per_night=Decimal("50.00"),
        capacity=4,
        title="Cabaña en el lago",
    )


@pytest.fixture
def store(accommodation):
    store = InMemoryPersistenceStore()
    store.add_accommodation(accommodation)
    return store


@pytest.fixture
def user_directory():
    directory = InMemoryUserDirectory()
    directory.add_user(User(id=HOST_ID, email=HOST_EMAIL, role=Role.HOST, name="Host"))
    directory.add_user(User(id=GUEST_ID, email=GUEST_EMAIL, role=Role.GUEST, name="Guest"))
    directory.add_user(
        User(id=OTHER_GUEST_ID, email=OTHER_GUEST_EMAIL, role=Role.GUEST, name="Other Guest")
    )
    directory.add_user(
        User(id=OTHER_HOST_ID, email=OTHER_HOST_EMAIL, role=Role.HOST, name="Other Host")
    )
    return directory


@pytest.fixture
def sink():
    return InMemoryNotificationSink()


@pytest.fixture
def breaker():
    """Breaker propio por test para no compartir contadores de fallos."""
    return build_notification_breaker(fail_max=5, reset_timeout=60)


@pytest.fixture
def dispatcher(sink, clock, breaker):
    return BackgroundNotificationDispatcher(
        sink=sink,
        clock=clock,
        max_attempts=3,
        base_delay=0,
        breaker=breaker,
    )


@pytest.fixture
def locks():
    return InProcessAccommodationLocks(timeout_seconds=1.0)


@pytest.fixture
def coordinator(store, user_directory, dispatcher, locks, clock):
    return BookingCoordinator(
        store=store,
        user_directory=user_directory,
        notifier=dispatcher,
        lock_manager=locks,
        clock=clock,
        max_attempts=3,
    )


# ============================================================================
# FIXTURES DE CLIENTE HTTP
# ============================================================================

@pytest.fixture
def bundle(store, user_directory, sink, dispatcher, locks, clock):
    return {
        "engine": None,
        "clock": clock,
        "store": store,
        "user_directory": user_directory,
        "sink": sink,
        "dispatcher": dispatcher,
        "locks": locks,
    }


@pytest_asyncio.fixture
async def api_client(bundle):
    """
    Cliente async con override del bundle de dependencias.
    ASGITransport no ejecuta el lifespan, así que no se crean tablas.
    """
    app.dependency_overrides[get_bundle] = lambda: bundle
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    await bundle["dispatcher"].drain()
    app.dependency_overrides.clear()


# ============================================================================
# MARKERS DE PYTEST
# ============================================================================

def pytest_configure(config):
    """
    Configurar markers personalizados de pytest.
    """
    config.addinivalue_line(
        "markers",
        "concurrency: Tests que compiten por el mismo alojamiento"
    )
    config.addinivalue_line(
        "markers",
        "sql: Tests contra una base SQLite temporal"
    )
    config.addinivalue_line(
        "markers",
        "deadlock: Tests de escenarios de deadlock"
    )
    config.addinivalue_line(
        "markers",
        "circuit_breaker: Tests del circuit breaker"
    )


# ============================================================================
# HOOKS DE PYTEST
# ============================================================================

@pytest.fixture(autouse=True)
def reset_circuit_breakers():
    """
    Reset circuit breakers antes de cada test.
    Evita que tests fallen por breakers abiertos de tests anteriores.
    """
    notification_breaker.close()

    yield

    notification_breaker.close()
