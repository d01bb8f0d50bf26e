"""Shared helpers for filtered, sorted and paginated repository queries."""

from collections.abc import Callable
from typing import Any, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.entities import Page, PageRequest

T = TypeVar("T")


def like_pattern(term: str) -> str:
    """Build a case-insensitive ``LIKE`` pattern for a free-text search."""
    return f"%{term.strip()}%"


async def fetch_page(
    session: AsyncSession,
    stmt: Select,
    page: PageRequest | None,
    to_entity: Callable[[Any], T],
    *,
    scalars: bool = True,
) -> Page[T]:
    """Execute ``stmt`` (already filtered and ordered) as one page.

    With ``page=None`` every row is returned and the page reports itself as
    page 1 sized to the total.
    """
    if page is None:
        result = await session.execute(stmt)
        rows = result.scalars().all() if scalars else result.all()
        items = [to_entity(row) for row in rows]
        return Page(items=items, total=len(items), page=1, page_size=len(items))

    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = (await session.execute(count_stmt)).scalar_one()
    result = await session.execute(stmt.offset(page.offset).limit(page.page_size))
    rows = result.scalars().all() if scalars else result.all()
    return Page(
        items=[to_entity(row) for row in rows],
        total=total,
        page=page.page,
        page_size=page.page_size,
    )
