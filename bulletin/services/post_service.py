"""
Post service: business logic for the Post aggregate.

Design notes
------------
- ``get_by_id`` is the one read with a write side effect: every call
  bumps ``view_count`` before the post is returned.
- Like, hate and view counters change through single UPDATE statements
  in ``PostRepository`` so concurrent requests never lose an increment.
  The hate UPDATE also rewrites ``flagged`` (``hate_count >= 10``), which
  is the only path into or out of the flagged state.
- Counters have no floor and no per-user vote tracking: removing a like
  or hate that was never added drives the count negative.
- Listings and search are newest first and zero-indexed; the author is
  joined eagerly so list responses carry a ``UserSummary``.
"""
import logging
from enum import Enum

from bulletin.exceptions import InvalidSearchType, NotFound
from bulletin.models import FLAG_THRESHOLD, Post, utcnow
from bulletin.repositories.board_repository import BoardRepository
from bulletin.repositories.post_repository import PostRepository
from bulletin.repositories.user_repository import UserRepository
from bulletin.schemas import Page, PostResponse, PostUpdate

logger = logging.getLogger(__name__)


class SearchType(str, Enum):
    TITLE = "title"
    TITLE_CONTENT = "title_content"
    AUTHOR = "author"


def _normalise_image(image_url: str | None) -> str | None:
    """Blank or missing image references are stored as NULL."""
    if image_url is None or not image_url.strip():
        return None
    return image_url


class PostService:
    def __init__(
        self,
        posts: PostRepository,
        boards: BoardRepository,
        users: UserRepository,
    ) -> None:
        self.posts = posts
        self.boards = boards
        self.users = users

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _load(self, post_id: int) -> Post:
        post = await self.posts.get_by_id(post_id)
        if post is None:
            raise NotFound("Post", post_id)
        return post

    @staticmethod
    def _to_page(rows: list[Post], total: int, page: int, page_size: int) -> Page[PostResponse]:
        items = [PostResponse.model_validate(p) for p in rows]
        return Page[PostResponse].build(items, total, page, page_size)

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    async def create(
        self,
        board_id: int,
        user_id: int,
        title: str,
        content: str,
        image_url: str | None = None,
    ) -> PostResponse:
        if await self.boards.get_by_id(board_id) is None:
            raise NotFound("Board", board_id)
        if await self.users.get_by_id(user_id) is None:
            raise NotFound("User", user_id)

        now = utcnow()
        post = Post(
            board_id=board_id,
            user_id=user_id,
            title=title,
            content=content,
            image_url=_normalise_image(image_url),
            like_count=0,
            hate_count=0,
            view_count=0,
            flagged=False,
            created_at=now,
            updated_at=now,
        )
        post = await self.posts.add(post)
        logger.info("Post created: id=%d board_id=%d user_id=%d", post.id, board_id, user_id)
        return PostResponse.model_validate(await self._load(post.id))

    async def list_all(self, page: int, page_size: int) -> Page[PostResponse]:
        rows, total = await self.posts.list_all(page, page_size)
        return self._to_page(rows, total, page, page_size)

    async def list_by_board(self, board_id: int, page: int, page_size: int) -> Page[PostResponse]:
        if await self.boards.get_by_id(board_id) is None:
            raise NotFound("Board", board_id)
        rows, total = await self.posts.list_by_board(board_id, page, page_size)
        return self._to_page(rows, total, page, page_size)

    async def list_by_user(self, user_id: int, page: int, page_size: int) -> Page[PostResponse]:
        if await self.users.get_by_id(user_id) is None:
            raise NotFound("User", user_id)
        rows, total = await self.posts.list_by_user(user_id, page, page_size)
        return self._to_page(rows, total, page, page_size)

    async def get_by_id(self, post_id: int) -> PostResponse:
        """Return *post_id*, counting this call as one view."""
        if not await self.posts.increment_views(post_id):
            raise NotFound("Post", post_id)
        return PostResponse.model_validate(await self._load(post_id))

    async def update(self, post_id: int, data: PostUpdate) -> PostResponse:
        """
        Replace title and content.  ``image_url`` is only touched when the
        caller set it explicitly; null or blank clears the image.
        """
        post = await self._load(post_id)
        post.title = data.title
        post.content = data.content
        if "image_url" in data.model_fields_set:
            post.image_url = _normalise_image(data.image_url)
        post.updated_at = utcnow()
        await self.posts.flush()
        logger.info("Post updated: id=%d", post_id)
        return PostResponse.model_validate(post)

    async def delete(self, post_id: int) -> None:
        post = await self._load(post_id)
        await self.posts.delete(post)
        logger.info("Post deleted: id=%d", post_id)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    async def search(
        self, search_type: str, keyword: str, page: int, page_size: int
    ) -> Page[PostResponse]:
        try:
            kind = SearchType(search_type)
        except ValueError:
            raise InvalidSearchType(search_type, [t.value for t in SearchType]) from None

        if kind is SearchType.TITLE:
            rows, total = await self.posts.search_title(keyword, page, page_size)
        elif kind is SearchType.TITLE_CONTENT:
            rows, total = await self.posts.search_title_or_content(keyword, page, page_size)
        else:
            rows, total = await self.posts.search_author(keyword, page, page_size)
        return self._to_page(rows, total, page, page_size)

    # ------------------------------------------------------------------
    # Moderation counters
    # ------------------------------------------------------------------

    async def _change_likes(self, post_id: int, delta: int) -> PostResponse:
        if not await self.posts.change_likes(post_id, delta):
            raise NotFound("Post", post_id)
        return PostResponse.model_validate(await self._load(post_id))

    async def _change_hates(self, post_id: int, delta: int) -> PostResponse:
        before = await self._load(post_id)
        was_flagged = before.flagged
        await self.posts.change_hates(post_id, delta)
        post = await self._load(post_id)
        if post.flagged != was_flagged:
            logger.info(
                "Post id=%d %s (hate_count=%d, threshold=%d)",
                post_id,
                "flagged" if post.flagged else "unflagged",
                post.hate_count,
                FLAG_THRESHOLD,
            )
        return PostResponse.model_validate(post)

    async def add_like(self, post_id: int) -> PostResponse:
        return await self._change_likes(post_id, 1)

    async def remove_like(self, post_id: int) -> PostResponse:
        return await self._change_likes(post_id, -1)

    async def add_hate(self, post_id: int) -> PostResponse:
        return await self._change_hates(post_id, 1)

    async def remove_hate(self, post_id: int) -> PostResponse:
        return await self._change_hates(post_id, -1)
