from stayhub.application.interfaces.user_directory import UserDirectory
from stayhub.domain.entities.user import User


class InMemoryUserDirectory(UserDirectory):
    def __init__(self) -> None:
        self.users: dict[int, User] = {}

    def add_user(self, user: User) -> User:
        self.users[user.id] = user
        return user

    async def find_by_email(self, email: str) -> User | None:
        wanted = email.strip().lower()
        for user in self.users.values():
            if user.email.lower() == wanted:
                return user
        return None

    async def find_by_id(self, user_id: int) -> User | None:
        return self.users.get(user_id)
