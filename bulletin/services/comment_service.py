"""
Comment service: comments scoped to a post.

Only the author of a comment may edit or delete it.  The requesting
user id is supplied by the caller; authentication is out of scope for
this API.
"""
import logging

from bulletin.exceptions import Forbidden, NotFound
from bulletin.models import Comment, utcnow
from bulletin.repositories.comment_repository import CommentRepository
from bulletin.repositories.post_repository import PostRepository
from bulletin.repositories.user_repository import UserRepository
from bulletin.schemas import CommentResponse, Page

logger = logging.getLogger(__name__)


class CommentService:
    def __init__(
        self,
        comments: CommentRepository,
        posts: PostRepository,
        users: UserRepository,
    ) -> None:
        self.comments = comments
        self.posts = posts
        self.users = users

    async def _load(self, comment_id: int) -> Comment:
        comment = await self.comments.get_by_id(comment_id)
        if comment is None:
            raise NotFound("Comment", comment_id)
        return comment

    async def _require_post(self, post_id: int) -> None:
        if not await self.posts.exists(post_id):
            raise NotFound("Post", post_id)

    async def _require_user(self, user_id: int) -> None:
        if await self.users.get_by_id(user_id) is None:
            raise NotFound("User", user_id)

    async def _load_for_author(self, comment_id: int, user_id: int, action: str) -> Comment:
        comment = await self._load(comment_id)
        await self._require_user(user_id)
        if comment.user_id != user_id:
            logger.warning(
                "User id=%d may not %s comment id=%d (author id=%d)",
                user_id, action, comment_id, comment.user_id,
            )
            raise Forbidden(
                f"Only the author may {action} this comment",
                detail={"comment_id": comment_id, "user_id": user_id},
            )
        return comment

    @staticmethod
    def _to_page(rows: list[Comment], total: int, page: int, page_size: int) -> Page[CommentResponse]:
        items = [CommentResponse.model_validate(c) for c in rows]
        return Page[CommentResponse].build(items, total, page, page_size)

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    async def create(self, post_id: int, user_id: int, content: str) -> CommentResponse:
        await self._require_post(post_id)
        await self._require_user(user_id)

        now = utcnow()
        comment = await self.comments.add(
            Comment(
                post_id=post_id,
                user_id=user_id,
                content=content,
                like_count=0,
                hate_count=0,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info("Comment created: id=%d post_id=%d user_id=%d", comment.id, post_id, user_id)
        return CommentResponse.model_validate(comment)

    async def list_by_post(self, post_id: int, page: int, page_size: int) -> Page[CommentResponse]:
        await self._require_post(post_id)
        rows, total = await self.comments.list_by_post(post_id, page, page_size)
        return self._to_page(rows, total, page, page_size)

    async def list_by_user(self, user_id: int, page: int, page_size: int) -> Page[CommentResponse]:
        await self._require_user(user_id)
        rows, total = await self.comments.list_by_user(user_id, page, page_size)
        return self._to_page(rows, total, page, page_size)

    async def get_by_id(self, comment_id: int) -> CommentResponse:
        return CommentResponse.model_validate(await self._load(comment_id))

    async def update(self, comment_id: int, requesting_user_id: int, new_content: str) -> CommentResponse:
        comment = await self._load_for_author(comment_id, requesting_user_id, "edit")
        comment.content = new_content
        comment.updated_at = utcnow()
        await self.comments.flush()
        logger.info("Comment updated: id=%d", comment_id)
        return CommentResponse.model_validate(comment)

    async def delete(self, comment_id: int, requesting_user_id: int) -> None:
        comment = await self._load_for_author(comment_id, requesting_user_id, "delete")
        await self.comments.delete(comment)
        logger.info("Comment deleted: id=%d", comment_id)

    # ------------------------------------------------------------------
    # Counters (no floor, no flagged state for comments)
    # ------------------------------------------------------------------

    async def _change(self, apply, comment_id: int, delta: int) -> CommentResponse:
        """Run one counter UPDATE (*apply* is a repository method) and reload."""
        if not await apply(comment_id, delta):
            raise NotFound("Comment", comment_id)
        return CommentResponse.model_validate(await self._load(comment_id))

    async def add_like(self, comment_id: int) -> CommentResponse:
        return await self._change(self.comments.change_likes, comment_id, 1)

    async def remove_like(self, comment_id: int) -> CommentResponse:
        return await self._change(self.comments.change_likes, comment_id, -1)

    async def add_hate(self, comment_id: int) -> CommentResponse:
        return await self._change(self.comments.change_hates, comment_id, 1)

    async def remove_hate(self, comment_id: int) -> CommentResponse:
        return await self._change(self.comments.change_hates, comment_id, -1)
