from sqlalchemy import func, select

from stayhub.application.interfaces.user_directory import UserDirectory
from stayhub.domain.entities.user import Role, User
from stayhub.infrastructure.db.engine import session_scope
from stayhub.infrastructure.db.tables import users


def _row_to_user(row) -> User:
    return User(id=row["id"], email=row["email"], role=Role(row["role"]), name=row["name"] or "")


class UserDirectorySQL(UserDirectory):
    def __init__(self, session_maker) -> None:
        self._session_maker = session_maker

    async def find_by_email(self, email: str) -> User | None:
        stmt = select(users).where(func.lower(users.c.email) == email.strip().lower()).limit(1)
        async with session_scope(self._session_maker) as session:
            row = (await session.execute(stmt)).mappings().first()
        return _row_to_user(row) if row else None

    async def find_by_id(self, user_id: int) -> User | None:
        stmt = select(users).where(users.c.id == user_id).limit(1)
        async with session_scope(self._session_maker) as session:
            row = (await session.execute(stmt)).mappings().first()
        return _row_to_user(row) if row else None
