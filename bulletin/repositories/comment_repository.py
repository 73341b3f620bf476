from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from bulletin.models import Comment
from bulletin.repositories.base import paginate

_NEWEST_FIRST = (Comment.created_at.desc(), Comment.id.desc())


class CommentRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_by_id(self, comment_id: int) -> Comment | None:
        return await self.db.get(Comment, comment_id, populate_existing=True)

    async def list_by_post(self, post_id: int, page: int, page_size: int) -> tuple[list[Comment], int]:
        stmt = select(Comment).where(Comment.post_id == post_id)
        return await paginate(self.db, stmt, page, page_size, order_by=_NEWEST_FIRST)

    async def list_by_user(self, user_id: int, page: int, page_size: int) -> tuple[list[Comment], int]:
        stmt = select(Comment).where(Comment.user_id == user_id)
        return await paginate(self.db, stmt, page, page_size, order_by=_NEWEST_FIRST)

    async def add(self, comment: Comment) -> Comment:
        self.db.add(comment)
        await self.db.flush()
        return comment

    async def flush(self) -> None:
        await self.db.flush()

    async def delete(self, comment: Comment) -> None:
        await self.db.delete(comment)
        await self.db.flush()

    async def _apply(self, comment_id: int, **values) -> bool:
        stmt = (
            update(Comment)
            .where(Comment.id == comment_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount > 0

    async def change_likes(self, comment_id: int, delta: int) -> bool:
        return await self._apply(comment_id, like_count=Comment.like_count + delta)

    async def change_hates(self, comment_id: int, delta: int) -> bool:
        return await self._apply(comment_id, hate_count=Comment.hate_count + delta)
