from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bulletin.models import Board


class BoardRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_by_id(self, board_id: int) -> Board | None:
        return await self.db.get(Board, board_id)

    async def get_by_name(self, name: str) -> Board | None:
        return await self.db.scalar(select(Board).where(Board.name == name))

    async def list(self) -> list[Board]:
        result = await self.db.execute(select(Board).order_by(Board.id))
        return list(result.scalars().all())

    async def add(self, board: Board) -> Board:
        self.db.add(board)
        await self.db.flush()
        return board

    async def flush(self) -> None:
        await self.db.flush()

    async def delete(self, board: Board) -> None:
        # Posts and their comments go with it (ON DELETE CASCADE).
        await self.db.delete(board)
        await self.db.flush()
