from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from bulletin.models import FLAG_THRESHOLD, Post, User
from bulletin.repositories.base import paginate

# Newest first; id breaks ties between rows created in the same instant.
_NEWEST_FIRST = (Post.created_at.desc(), Post.id.desc())
_WITH_AUTHOR = (joinedload(Post.author),)


class PostRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def get_by_id(self, post_id: int) -> Post | None:
        """
        Load *post_id* with its author joined.

        ``populate_existing`` refreshes an instance already sitting in the
        identity map, so values written by the counter UPDATEs are seen.
        """
        return await self.db.get(
            Post, post_id, options=list(_WITH_AUTHOR), populate_existing=True
        )

    async def exists(self, post_id: int) -> bool:
        found = await self.db.scalar(select(Post.id).where(Post.id == post_id))
        return found is not None

    # ------------------------------------------------------------------
    # Paginated listings
    # ------------------------------------------------------------------

    async def _page(self, stmt, page: int, page_size: int) -> tuple[list[Post], int]:
        return await paginate(
            self.db, stmt, page, page_size, order_by=_NEWEST_FIRST, options=_WITH_AUTHOR
        )

    async def list_all(self, page: int, page_size: int) -> tuple[list[Post], int]:
        return await self._page(select(Post), page, page_size)

    async def list_by_board(self, board_id: int, page: int, page_size: int) -> tuple[list[Post], int]:
        return await self._page(select(Post).where(Post.board_id == board_id), page, page_size)

    async def list_by_user(self, user_id: int, page: int, page_size: int) -> tuple[list[Post], int]:
        return await self._page(select(Post).where(Post.user_id == user_id), page, page_size)

    async def search_title(self, keyword: str, page: int, page_size: int) -> tuple[list[Post], int]:
        stmt = select(Post).where(Post.title.contains(keyword, autoescape=True))
        return await self._page(stmt, page, page_size)

    async def search_title_or_content(
        self, keyword: str, page: int, page_size: int
    ) -> tuple[list[Post], int]:
        stmt = select(Post).where(
            or_(
                Post.title.contains(keyword, autoescape=True),
                Post.content.contains(keyword, autoescape=True),
            )
        )
        return await self._page(stmt, page, page_size)

    async def search_author(self, keyword: str, page: int, page_size: int) -> tuple[list[Post], int]:
        stmt = (
            select(Post)
            .join(User, Post.user_id == User.id)
            .where(User.username.contains(keyword, autoescape=True))
        )
        return await self._page(stmt, page, page_size)

    async def count_flagged_by_user(self, user_id: int) -> int:
        q = (
            select(func.count())
            .select_from(Post)
            .where(Post.user_id == user_id, Post.flagged.is_(True))
        )
        return (await self.db.execute(q)).scalar_one()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def add(self, post: Post) -> Post:
        self.db.add(post)
        await self.db.flush()
        return post

    async def flush(self) -> None:
        await self.db.flush()

    async def delete(self, post: Post) -> None:
        # Comments go with it (ON DELETE CASCADE).
        await self.db.delete(post)
        await self.db.flush()

    async def _apply(self, post_id: int, **values) -> bool:
        """Run one UPDATE on *post_id*; False when no row matched."""
        stmt = (
            update(Post)
            .where(Post.id == post_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount > 0

    async def increment_views(self, post_id: int) -> bool:
        return await self._apply(post_id, view_count=Post.view_count + 1)

    async def change_likes(self, post_id: int, delta: int) -> bool:
        return await self._apply(post_id, like_count=Post.like_count + delta)

    async def change_hates(self, post_id: int, delta: int) -> bool:
        """
        Shift hate_count by *delta* and recompute ``flagged`` in the same
        statement.  SET expressions read the pre-update row, hence the
        ``+ delta`` on both sides.
        """
        return await self._apply(
            post_id,
            hate_count=Post.hate_count + delta,
            flagged=(Post.hate_count + delta) >= FLAG_THRESHOLD,
        )
