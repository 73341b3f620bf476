from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from bulletin.config import settings
from bulletin.database import get_db
from bulletin.repositories.board_repository import BoardRepository
from bulletin.repositories.comment_repository import CommentRepository
from bulletin.repositories.post_repository import PostRepository
from bulletin.repositories.user_repository import UserRepository
from bulletin.security import PasswordHasher
from bulletin.services.board_service import BoardService
from bulletin.services.comment_service import CommentService
from bulletin.services.post_service import PostService
from bulletin.services.user_service import UserService


class PaginationParams:
    """
    Reusable FastAPI dependency that parses zero-indexed pagination
    query parameters.

    Attributes
    ----------
    page:
        0-based page number.
    size:
        Number of items per page, clamped to ``settings.MAX_PAGE_SIZE``
        regardless of the value supplied by the caller.
    """

    def __init__(
        self,
        page: int = Query(0, ge=0, description="Page number (0-based)."),
        size: int = Query(
            settings.DEFAULT_PAGE_SIZE,
            ge=1,
            description="Items per page (capped at MAX_PAGE_SIZE).",
        ),
    ) -> None:
        self.page = page
        self.size = min(size, settings.MAX_PAGE_SIZE)


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------

_password_hasher = PasswordHasher()


def get_password_hasher() -> PasswordHasher:
    """Shared hasher; tests override this with a low-cost configuration."""
    return _password_hasher


# ---------------------------------------------------------------------------
# Services, one instance per request
# ---------------------------------------------------------------------------

def get_board_service(db: AsyncSession = Depends(get_db)) -> BoardService:
    return BoardService(BoardRepository(db))


def get_user_service(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserService:
    return UserService(UserRepository(db), PostRepository(db), hasher)


def get_post_service(db: AsyncSession = Depends(get_db)) -> PostService:
    return PostService(PostRepository(db), BoardRepository(db), UserRepository(db))


def get_comment_service(db: AsyncSession = Depends(get_db)) -> CommentService:
    return CommentService(CommentRepository(db), PostRepository(db), UserRepository(db))
