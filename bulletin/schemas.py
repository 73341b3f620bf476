import math
from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


def check_page_bounds(page: int, page_size: int) -> None:
    if page < 0:
        raise ValueError(f"page must be >= 0, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")


# --- User ---

class UserSignUp(BaseModel):
    username: str = Field(min_length=1, max_length=20)
    password: str = Field(min_length=1, max_length=128)
    nickname: str = Field(min_length=1, max_length=20)


class UserLogin(BaseModel):
    username: str
    password: str


class PasswordUpdate(BaseModel):
    current_password: str
    new_password: str = Field(min_length=1, max_length=128)


class UserSummary(BaseModel):
    id: int
    username: str
    nickname: str
    model_config = ConfigDict(from_attributes=True)


class UserResponse(UserSummary):
    flagged: bool
    created_at: datetime


class UserProfile(UserResponse):
    flagged_post_count: int = 0


# --- Board ---

class BoardCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)


class BoardRename(BoardCreate):
    pass


class BoardResponse(BaseModel):
    id: int
    name: str
    model_config = ConfigDict(from_attributes=True)


# --- Post ---

class PostCreate(BaseModel):
    board_id: int
    user_id: int
    title: str = Field(min_length=1, max_length=60)
    content: str
    image_url: str | None = Field(None, max_length=100)


class PostUpdate(BaseModel):
    title: str = Field(min_length=1, max_length=60)
    content: str
    # Omitted: keep the current image.  Sent as null or "": clear it.
    image_url: str | None = Field(None, max_length=100)


class PostResponse(BaseModel):
    id: int
    board_id: int
    user_id: int
    title: str
    content: str
    image_url: str | None
    like_count: int
    hate_count: int
    view_count: int
    flagged: bool
    created_at: datetime
    updated_at: datetime
    author: UserSummary | None = None
    model_config = ConfigDict(from_attributes=True)


# --- Comment ---

class CommentCreate(BaseModel):
    user_id: int
    content: str = Field(min_length=1)


class CommentUpdate(CommentCreate):
    pass


class CommentResponse(BaseModel):
    id: int
    post_id: int
    user_id: int
    content: str
    like_count: int
    hate_count: int
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


# --- Pagination ---

class Page(BaseModel, Generic[T]):
    items: list[T]
    total_elements: int
    total_pages: int
    current_page: int
    page_size: int
    has_next: bool
    has_previous: bool

    @classmethod
    def build(cls, items: list[T], total: int, page: int, page_size: int) -> "Page[T]":
        """Assemble a zero-indexed page from one slice and the total row count."""
        check_page_bounds(page, page_size)
        total_pages = math.ceil(total / page_size) if total > 0 else 0
        return cls(
            items=items,
            total_elements=total,
            total_pages=total_pages,
            current_page=page,
            page_size=page_size,
            has_next=page + 1 < total_pages,
            has_previous=page > 0,
        )
