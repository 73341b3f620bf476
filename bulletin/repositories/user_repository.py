from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bulletin.models import User


class UserRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_by_id(self, user_id: int) -> User | None:
        return await self.db.get(User, user_id)

    async def get_by_username(self, username: str) -> User | None:
        return await self.db.scalar(select(User).where(User.username == username))

    async def get_by_nickname(self, nickname: str) -> User | None:
        return await self.db.scalar(select(User).where(User.nickname == nickname))

    async def add(self, user: User) -> User:
        self.db.add(user)
        await self.db.flush()
        return user

    async def flush(self) -> None:
        await self.db.flush()
