from stayhub.domain.entities.user import User


class UserDirectory:
    async def find_by_email(self, email: str) -> User | None:
        raise NotImplementedError

    async def find_by_id(self, user_id: int) -> User | None:
        raise NotImplementedError
