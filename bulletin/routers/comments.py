from fastapi import APIRouter, Depends, Query

from bulletin.dependencies import get_comment_service
from bulletin.schemas import CommentResponse, CommentUpdate
from bulletin.services.comment_service import CommentService

router = APIRouter(prefix="/api/v1/comments", tags=["comments"])

@router.get("/{comment_id}", response_model=CommentResponse)
async def get_comment(comment_id: int, service: CommentService = Depends(get_comment_service)):
    return await service.get_by_id(comment_id)

@router.put("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: int,
    data: CommentUpdate,
    service: CommentService = Depends(get_comment_service),
):
    return await service.update(comment_id, data.user_id, data.content)

# DELETE carries no body; the acting user comes from the query string.
@router.delete("/{comment_id}", status_code=204)
async def delete_comment(
    comment_id: int,
    user_id: int = Query(...),
    service: CommentService = Depends(get_comment_service),
):
    await service.delete(comment_id, user_id)

@router.post("/{comment_id}/like", response_model=CommentResponse)
async def add_like(comment_id: int, service: CommentService = Depends(get_comment_service)):
    return await service.add_like(comment_id)

@router.delete("/{comment_id}/like", response_model=CommentResponse)
async def remove_like(comment_id: int, service: CommentService = Depends(get_comment_service)):
    return await service.remove_like(comment_id)

@router.post("/{comment_id}/hate", response_model=CommentResponse)
async def add_hate(comment_id: int, service: CommentService = Depends(get_comment_service)):
    return await service.add_hate(comment_id)

@router.delete("/{comment_id}/hate", response_model=CommentResponse)
async def remove_hate(comment_id: int, service: CommentService = Depends(get_comment_service)):
    return await service.remove_hate(comment_id)
