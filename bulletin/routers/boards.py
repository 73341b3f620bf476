from fastapi import APIRouter, Depends

from bulletin.dependencies import PaginationParams, get_board_service, get_post_service
from bulletin.schemas import BoardCreate, BoardRename, BoardResponse, Page, PostResponse
from bulletin.services.board_service import BoardService
from bulletin.services.post_service import PostService

router = APIRouter(prefix="/api/v1/boards", tags=["boards"])

@router.post("", status_code=201, response_model=BoardResponse)
async def create_board(data: BoardCreate, service: BoardService = Depends(get_board_service)):
    return await service.create_board(data.name)

@router.get("", response_model=list[BoardResponse])
async def list_boards(service: BoardService = Depends(get_board_service)):
    return await service.list_boards()

@router.get("/{board_id}", response_model=BoardResponse)
async def get_board(board_id: int, service: BoardService = Depends(get_board_service)):
    return await service.get_board(board_id)

@router.put("/{board_id}", response_model=BoardResponse)
async def rename_board(
    board_id: int,
    data: BoardRename,
    service: BoardService = Depends(get_board_service),
):
    return await service.rename_board(board_id, data.name)

@router.delete("/{board_id}", status_code=204)
async def delete_board(board_id: int, service: BoardService = Depends(get_board_service)):
    await service.delete_board(board_id)

@router.get("/{board_id}/posts", response_model=Page[PostResponse])
async def list_board_posts(
    board_id: int,
    pagination: PaginationParams = Depends(),
    service: PostService = Depends(get_post_service),
):
    return await service.list_by_board(board_id, pagination.page, pagination.size)
