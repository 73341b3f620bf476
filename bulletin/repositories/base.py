from collections.abc import Sequence
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bulletin.schemas import check_page_bounds


async def paginate(
    db: AsyncSession,
    stmt: Select,
    page: int,
    page_size: int,
    order_by: Sequence[Any] = (),
    options: Sequence[Any] = (),
) -> tuple[list[Any], int]:
    """
    Run *stmt* as a zero-indexed page and return ``(rows, total)``.

    *stmt* carries only the FROM / WHERE part.  Two statements are issued:
    a COUNT over *stmt*, then the ordered LIMIT/OFFSET slice with the
    loader *options* applied.  A negative *page* or a *page_size* below 1
    raises ``ValueError`` before any SQL runs.
    """
    check_page_bounds(page, page_size)
    count_q = select(func.count()).select_from(stmt.subquery())
    total: int = (await db.execute(count_q)).scalar_one()

    page_q = (
        stmt.options(*options)
        .order_by(*order_by)
        .offset(page * page_size)
        .limit(page_size)
    )
    result = await db.execute(page_q)
    return list(result.unique().scalars().all()), total
