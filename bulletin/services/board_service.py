"""
Board service: CRUD for boards with a unique-name invariant.

The name check runs before every write; the unique constraint on
``boards.name`` closes the window between check and flush, and its
violation is reported as the same ``DuplicateName`` error.
"""
import logging

from sqlalchemy.exc import IntegrityError

from bulletin.exceptions import DuplicateName, NotFound
from bulletin.models import Board
from bulletin.repositories.board_repository import BoardRepository
from bulletin.schemas import BoardResponse

logger = logging.getLogger(__name__)


class BoardService:
    def __init__(self, boards: BoardRepository) -> None:
        self.boards = boards

    async def _load(self, board_id: int) -> Board:
        board = await self.boards.get_by_id(board_id)
        if board is None:
            raise NotFound("Board", board_id)
        return board

    async def create_board(self, name: str) -> BoardResponse:
        if await self.boards.get_by_name(name) is not None:
            raise DuplicateName(name)
        try:
            board = await self.boards.add(Board(name=name))
        except IntegrityError as exc:
            raise DuplicateName(name) from exc
        logger.info("Board created: id=%d name=%r", board.id, board.name)
        return BoardResponse.model_validate(board)

    async def list_boards(self) -> list[BoardResponse]:
        return [BoardResponse.model_validate(b) for b in await self.boards.list()]

    async def get_board(self, board_id: int) -> BoardResponse:
        return BoardResponse.model_validate(await self._load(board_id))

    async def rename_board(self, board_id: int, new_name: str) -> BoardResponse:
        board = await self._load(board_id)
        holder = await self.boards.get_by_name(new_name)
        if holder is not None and holder.id != board.id:
            raise DuplicateName(new_name)

        board.name = new_name
        try:
            await self.boards.flush()
        except IntegrityError as exc:
            raise DuplicateName(new_name) from exc
        logger.info("Board renamed: id=%d name=%r", board_id, new_name)
        return BoardResponse.model_validate(board)

    async def delete_board(self, board_id: int) -> None:
        board = await self._load(board_id)
        await self.boards.delete(board)
        logger.info("Board deleted: id=%d", board_id)
