import logging
from dataclasses import replace
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any

from sqlalchemy import and_, insert, select, update

from stayhub.application.interfaces.persistence_store import (
    ConflictPredicate,
    ConflictSignal,
    PersistenceStore,
)
from stayhub.domain.entities.accommodation import Accommodation
from stayhub.domain.entities.reservation import ACTIVE_STATUSES, Reservation, ReservationStatus
from stayhub.infrastructure.db.engine import session_scope
from stayhub.infrastructure.db.repositories._datetimes import to_db
from stayhub.infrastructure.db.retry import retry_on_deadlock, with_deadlock_retry
from stayhub.infrastructure.db.tables import accommodations, reservations

logger = logging.getLogger(__name__)

_ACTIVE_VALUES = sorted(status.value for status in ACTIVE_STATUSES)


def _row_to_accommodation(row: Any) -> Accommodation:
    return Accommodation(
        id=row["id"],
        host_id=row["host_id"],
        price_per_night=Decimal(str(row["price_per_night"])),
        capacity=row["capacity"],
        title=row["title"] or "",
        deleted=bool(row["deleted"]),
    )


def _row_to_reservation(row: Any) -> Reservation:
    return Reservation(
        id=row["id"],
        guest_id=row["guest_id"],
        accommodation_id=row["accommodation_id"],
        check_in=row["check_in"],
        check_out=row["check_out"],
        guest_count=row["guest_count"],
        total_price=Decimal(str(row["total_price"])).quantize(Decimal("0.01")),
        status=ReservationStatus(row["status"]),
        deleted=bool(row["deleted"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _reservation_values(reservation: Reservation) -> dict[str, Any]:
    return {
        "guest_id": reservation.guest_id,
        "accommodation_id": reservation.accommodation_id,
        "check_in": to_db(reservation.check_in),
        "check_out": to_db(reservation.check_out),
        "guest_count": reservation.guest_count,
        "total_price": reservation.total_price,
        "status": reservation.status.value,
        "deleted": reservation.deleted,
        "created_at": to_db(reservation.created_at),
        "updated_at": to_db(reservation.updated_at),
    }


def _active_clause(accommodation_id: int):
    return and_(
        reservations.c.accommodation_id == accommodation_id,
        reservations.c.status.in_(_ACTIVE_VALUES),
        reservations.c.deleted.is_(False),
    )


class PersistenceStoreSQL(PersistenceStore):
    """
    Store relacional (MySQL/PostgreSQL/SQLite) sobre SQLAlchemy Core.

    Cada operación abre su propia transacción. La inserción de reservas toma
    un lock de fila sobre el alojamiento (SELECT ... FOR UPDATE) antes de
    releer el conjunto activo, de modo que dos procesos no pueden pasar el
    mismo chequeo de solapamiento. En SQLite el FOR UPDATE no existe; ahí la
    exclusión la da el BEGIN IMMEDIATE que configura build_engine.
    """

    def __init__(
        self,
        session_maker,
        deadlock_max_attempts: int = 3,
        deadlock_base_delay: float = 0.1,
    ) -> None:
        self._session_maker = session_maker
        self._deadlock_max_attempts = deadlock_max_attempts
        self._deadlock_base_delay = deadlock_base_delay

    async def find_accommodation(self, accommodation_id: int) -> Accommodation | None:
        stmt = select(accommodations).where(accommodations.c.id == accommodation_id).limit(1)
        async with session_scope(self._session_maker) as session:
            row = (await session.execute(stmt)).mappings().first()
        return _row_to_accommodation(row) if row else None

    async def active_reservations_for(self, accommodation_id: int) -> list[Reservation]:
        stmt = select(reservations).where(_active_clause(accommodation_id))
        async with session_scope(self._session_maker) as session:
            rows = (await session.execute(stmt)).mappings().all()
        return [_row_to_reservation(row) for row in rows]

    async def insert_reservation_if_no_conflict(
        self,
        reservation: Reservation,
        conflict_predicate: ConflictPredicate,
    ) -> Reservation | ConflictSignal:
        accommodation_id = reservation.accommodation_id

        async def _insert() -> Reservation | ConflictSignal:
            async with session_scope(self._session_maker) as session:
                await session.execute(
                    select(accommodations.c.id)
                    .where(accommodations.c.id == accommodation_id)
                    .with_for_update()
                )
                rows = (
                    await session.execute(
                        select(reservations).where(_active_clause(accommodation_id))
                    )
                ).mappings().all()
                active = [_row_to_reservation(row) for row in rows]
                if conflict_predicate(active):
                    logger.info(
                        "Insert rejected: overlapping reservation committed concurrently",
                        extra={"accommodation_id": accommodation_id},
                    )
                    return ConflictSignal(
                        accommodation_id=accommodation_id,
                        conflicting_reservation_ids=tuple(r.id for r in active if r.id is not None),
                    )

                result = await session.execute(
                    insert(reservations).values(_reservation_values(reservation))
                )
                new_id = result.inserted_primary_key[0]
            return replace(reservation, id=new_id)

        return await retry_on_deadlock(
            _insert,
            max_attempts=self._deadlock_max_attempts,
            base_delay=self._deadlock_base_delay,
        )

    @with_deadlock_retry()
    async def save(self, reservation: Reservation) -> Reservation:
        if reservation.id is None:
            raise ValueError("Reservation not found")
        stmt = (
            update(reservations)
            .where(reservations.c.id == reservation.id)
            .values(_reservation_values(reservation))
        )
        async with session_scope(self._session_maker) as session:
            result = await session.execute(stmt)
            if result.rowcount == 0:
                raise ValueError("Reservation not found")
        return reservation

    async def find_reservation(self, reservation_id: int) -> Reservation | None:
        stmt = select(reservations).where(reservations.c.id == reservation_id).limit(1)
        async with session_scope(self._session_maker) as session:
            row = (await session.execute(stmt)).mappings().first()
        return _row_to_reservation(row) if row else None

    async def reservations_for_guest(self, guest_id: int) -> list[Reservation]:
        stmt = select(reservations).where(reservations.c.guest_id == guest_id)
        return await self._fetch(stmt)

    async def reservations_for_accommodation(self, accommodation_id: int) -> list[Reservation]:
        stmt = select(reservations).where(reservations.c.accommodation_id == accommodation_id)
        return await self._fetch(stmt)

    async def active_reservations_checking_in(self, day: date) -> list[Reservation]:
        start = datetime.combine(day, time.min)
        stmt = select(reservations).where(
            and_(
                reservations.c.check_in >= start,
                reservations.c.check_in < start + timedelta(days=1),
                reservations.c.status.in_(_ACTIVE_VALUES),
                reservations.c.deleted.is_(False),
            )
        )
        return await self._fetch(stmt)

    async def _fetch(self, stmt) -> list[Reservation]:
        async with session_scope(self._session_maker) as session:
            rows = (await session.execute(stmt.order_by(reservations.c.id))).mappings().all()
        return [_row_to_reservation(row) for row in rows]
