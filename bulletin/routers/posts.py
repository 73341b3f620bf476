from fastapi import APIRouter, Depends, Query

from bulletin.dependencies import PaginationParams, get_comment_service, get_post_service
from bulletin.schemas import CommentCreate, CommentResponse, Page, PostCreate, PostResponse, PostUpdate
from bulletin.services.comment_service import CommentService
from bulletin.services.post_service import PostService

router = APIRouter(prefix="/api/v1/posts", tags=["posts"])

@router.post("", status_code=201, response_model=PostResponse)
async def create_post(data: PostCreate, service: PostService = Depends(get_post_service)):
    return await service.create(data.board_id, data.user_id, data.title, data.content, data.image_url)

@router.get("", response_model=Page[PostResponse])
async def list_posts(
    pagination: PaginationParams = Depends(),
    service: PostService = Depends(get_post_service),
):
    return await service.list_all(pagination.page, pagination.size)

# Declared before /{post_id} so "search" is not parsed as an id.
@router.get("/search", response_model=Page[PostResponse])
async def search_posts(
    type: str = Query(..., description="title, title_content or author"),
    keyword: str = Query(...),
    pagination: PaginationParams = Depends(),
    service: PostService = Depends(get_post_service),
):
    return await service.search(type, keyword, pagination.page, pagination.size)

@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, service: PostService = Depends(get_post_service)):
    return await service.get_by_id(post_id)

@router.put("/{post_id}", response_model=PostResponse)
async def update_post(post_id: int, data: PostUpdate, service: PostService = Depends(get_post_service)):
    return await service.update(post_id, data)

@router.delete("/{post_id}", status_code=204)
async def delete_post(post_id: int, service: PostService = Depends(get_post_service)):
    await service.delete(post_id)

@router.post("/{post_id}/like", response_model=PostResponse)
async def add_like(post_id: int, service: PostService = Depends(get_post_service)):
    return await service.add_like(post_id)

@router.delete("/{post_id}/like", response_model=PostResponse)
async def remove_like(post_id: int, service: PostService = Depends(get_post_service)):
    return await service.remove_like(post_id)

@router.post("/{post_id}/hate", response_model=PostResponse)
async def add_hate(post_id: int, service: PostService = Depends(get_post_service)):
    return await service.add_hate(post_id)

@router.delete("/{post_id}/hate", response_model=PostResponse)
async def remove_hate(post_id: int, service: PostService = Depends(get_post_service)):
    return await service.remove_hate(post_id)

@router.post("/{post_id}/comments", status_code=201, response_model=CommentResponse)
async def add_comment(
    post_id: int,
    data: CommentCreate,
    service: CommentService = Depends(get_comment_service),
):
    return await service.create(post_id, data.user_id, data.content)

@router.get("/{post_id}/comments", response_model=Page[CommentResponse])
async def list_comments(
    post_id: int,
    pagination: PaginationParams = Depends(),
    service: CommentService = Depends(get_comment_service),
):
    return await service.list_by_post(post_id, pagination.page, pagination.size)
