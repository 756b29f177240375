from functools import lru_cache
from typing import Any

from fastapi import Depends, Header, HTTPException, status

from stayhub.application.interfaces.clock import SystemClock
from stayhub.application.use_cases.booking_coordinator import BookingCoordinator
from stayhub.application.use_cases.reservation_queries import ReservationQueries
from stayhub.application.use_cases.send_check_in_reminders import SendCheckInRemindersUseCase
from stayhub.config import Settings, get_settings
from stayhub.domain.entities.user import User
from stayhub.infrastructure.db.engine import build_engine, build_sessionmaker
from stayhub.infrastructure.db.repositories import (
    NotificationSinkSQL,
    PersistenceStoreSQL,
    UserDirectorySQL,
)
from stayhub.infrastructure.in_memory import (
    InMemoryNotificationSink,
    InMemoryPersistenceStore,
    InMemoryUserDirectory,
)
from stayhub.infrastructure.in_memory.demo_data import seed_demo_data
from stayhub.infrastructure.locks import InProcessAccommodationLocks
from stayhub.infrastructure.messaging.notification_dispatcher import (
    BackgroundNotificationDispatcher,
)


def _dispatcher(sink, clock, settings: Settings) -> BackgroundNotificationDispatcher:
    return BackgroundNotificationDispatcher(
        sink=sink,
        clock=clock,
        max_attempts=settings.notification_max_attempts,
        base_delay=settings.notification_retry_base_delay_seconds,
    )


@lru_cache(maxsize=1)
def _in_memory_bundle() -> dict[str, Any]:
    settings = get_settings()
    clock = SystemClock()
    sink = InMemoryNotificationSink()
    store = InMemoryPersistenceStore()
    user_directory = InMemoryUserDirectory()
    if settings.seed_demo_data:
        seed_demo_data(store, user_directory)
    return {
        "engine": None,
        "clock": clock,
        "store": store,
        "user_directory": user_directory,
        "sink": sink,
        "dispatcher": _dispatcher(sink, clock, settings),
        "locks": InProcessAccommodationLocks(settings.booking_lock_timeout_seconds),
    }


@lru_cache(maxsize=1)
def _sql_bundle() -> dict[str, Any]:
    settings = get_settings()
    engine = build_engine(settings)
    session_maker = build_sessionmaker(engine)
    clock = SystemClock()
    sink = NotificationSinkSQL(session_maker)
    return {
        "engine": engine,
        "clock": clock,
        "store": PersistenceStoreSQL(
            session_maker,
            deadlock_max_attempts=settings.deadlock_max_attempts,
            deadlock_base_delay=settings.deadlock_base_delay_seconds,
        ),
        "user_directory": UserDirectorySQL(session_maker),
        "sink": sink,
        "dispatcher": _dispatcher(sink, clock, settings),
        "locks": InProcessAccommodationLocks(settings.booking_lock_timeout_seconds),
    }


def get_bundle(settings: Settings = Depends(get_settings)) -> dict[str, Any]:
    if settings.use_in_memory:
        return _in_memory_bundle()
    return _sql_bundle()


def get_use_cases(
    settings: Settings = Depends(get_settings),
    bundle: dict[str, Any] = Depends(get_bundle),
) -> dict[str, Any]:
    return {
        "booking": BookingCoordinator(
            store=bundle["store"],
            user_directory=bundle["user_directory"],
            notifier=bundle["dispatcher"],
            lock_manager=bundle["locks"],
            clock=bundle["clock"],
            max_attempts=settings.booking_max_attempts,
        ),
        "queries": ReservationQueries(store=bundle["store"]),
        "reminders": SendCheckInRemindersUseCase(
            store=bundle["store"],
            notifier=bundle["dispatcher"],
            clock=bundle["clock"],
        ),
    }


async def get_current_user(
    user_email: str | None = Header(default=None, alias="X-User-Email"),
    bundle: dict[str, Any] = Depends(get_bundle),
) -> User:
    if not user_email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-User-Email header is required",
        )
    user = await bundle["user_directory"].find_by_email(user_email)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown user",
        )
    return user
