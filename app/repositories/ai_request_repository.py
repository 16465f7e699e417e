"""
AI request persistence. Newest first everywhere: created_at desc, id desc as the
tie-breaker (ids grow with creation time).
"""
from typing import List, Optional, Tuple

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.ai_request import AIRequest


async def save(db: AsyncSession, record: AIRequest) -> AIRequest:
    """Insert the record and return it with its id populated."""
    db.add(record)
    await db.flush()
    await db.refresh(record)
    return record


async def find_page(
    db: AsyncSession,
    page: int,
    size: int,
    *,
    owner_id: Optional[int] = None,
) -> Tuple[List[AIRequest], int]:
    """Return one page of records plus the total matching count."""
    query = select(AIRequest)
    count_query = select(func.count()).select_from(AIRequest)
    if owner_id is not None:
        query = query.where(AIRequest.user_id == owner_id)
        count_query = count_query.where(AIRequest.user_id == owner_id)

    total = (await db.execute(count_query)).scalar() or 0
    # Offset and limit stay within the row count so both fit a 64-bit integer
    if page * size >= total:
        return [], total

    query = (
        query.order_by(AIRequest.created_at.desc(), AIRequest.id.desc())
        .offset(page * size)
        .limit(min(size, total - page * size))
    )
    rows = (await db.execute(query)).scalars().all()
    return list(rows), total


async def delete_by_id(db: AsyncSession, record_id: int) -> bool:
    """Delete by id. Returns whether a row was removed; a missing id is not an error."""
    result = await db.execute(delete(AIRequest).where(AIRequest.id == record_id))
    return (result.rowcount or 0) > 0


async def count_all(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(AIRequest))
    return result.scalar() or 0
