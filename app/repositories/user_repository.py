"""User persistence used by the admin gate, admin pages and account endpoints."""
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User, UserRole


async def find_by_id(db: AsyncSession, user_id: int) -> Optional[User]:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def find_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def find_page(db: AsyncSession, page: int, size: int) -> Tuple[List[User], int]:
    """Users ordered by id ascending, plus the total count."""
    total = await count_all(db)
    if page * size >= total:
        return [], total

    query = (
        select(User)
        .order_by(User.id.asc())
        .offset(page * size)
        .limit(min(size, total - page * size))
    )
    rows = (await db.execute(query)).scalars().all()
    return list(rows), total


async def find_emails(db: AsyncSession, user_ids: Iterable[int]) -> Dict[int, str]:
    """Map each existing user id to its email. Ids with no user are simply absent."""
    ids = set(user_ids)
    if not ids:
        return {}
    result = await db.execute(select(User.id, User.email).where(User.id.in_(ids)))
    return {row.id: row.email for row in result}


async def count_all(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(User))
    return result.scalar() or 0


async def count_by_role(db: AsyncSession, role: UserRole) -> int:
    result = await db.execute(
        select(func.count()).select_from(User).where(func.upper(User.role) == role.value)
    )
    return result.scalar() or 0


async def save(db: AsyncSession, user: User) -> User:
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


async def delete_by_id(db: AsyncSession, user_id: int) -> bool:
    result = await db.execute(delete(User).where(User.id == user_id))
    return (result.rowcount or 0) > 0
