from fastapi import APIRouter, Depends

from bulletin.dependencies import (
    PaginationParams,
    get_comment_service,
    get_post_service,
    get_user_service,
)
from bulletin.schemas import (
    CommentResponse,
    Page,
    PasswordUpdate,
    PostResponse,
    UserLogin,
    UserProfile,
    UserResponse,
    UserSignUp,
)
from bulletin.services.comment_service import CommentService
from bulletin.services.post_service import PostService
from bulletin.services.user_service import UserService

router = APIRouter(prefix="/api/v1/users", tags=["users"])

@router.post("/signup", status_code=201, response_model=UserResponse)
async def sign_up(data: UserSignUp, service: UserService = Depends(get_user_service)):
    return await service.sign_up(data.username, data.password, data.nickname)

@router.post("/login", response_model=UserResponse)
async def login(data: UserLogin, service: UserService = Depends(get_user_service)):
    return await service.login(data.username, data.password)

@router.get("/{user_id}", response_model=UserProfile)
async def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    return await service.get_profile(user_id)

@router.put("/{user_id}/password", status_code=204)
async def update_password(
    user_id: int,
    data: PasswordUpdate,
    service: UserService = Depends(get_user_service),
):
    await service.update_password(user_id, data.current_password, data.new_password)

@router.get("/{user_id}/posts", response_model=Page[PostResponse])
async def list_user_posts(
    user_id: int,
    pagination: PaginationParams = Depends(),
    service: PostService = Depends(get_post_service),
):
    return await service.list_by_user(user_id, pagination.page, pagination.size)

@router.get("/{user_id}/comments", response_model=Page[CommentResponse])
async def list_user_comments(
    user_id: int,
    pagination: PaginationParams = Depends(),
    service: CommentService = Depends(get_comment_service),
):
    return await service.list_by_user(user_id, pagination.page, pagination.size)
