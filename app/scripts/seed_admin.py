"""Seed the database with the first ADMIN user.

Usage:
    source .venv/bin/activate
    python -m app.scripts.seed_admin
"""

import asyncio
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import async_sessionmaker

from app.core.config import settings
from app.core.database import async_session
from app.core.logging import logger
from app.dependencies import hash_password
from app.models.user import User, UserRole


async def seed(
    session_factory: async_sessionmaker = async_session,
    email: Optional[str] = None,
    password: Optional[str] = None,
) -> User:
    """Create an ADMIN account unless one already exists; return the admin."""
    email = email or settings.SEED_ADMIN_EMAIL
    password = password or settings.SEED_ADMIN_PASSWORD

    async with session_factory() as session:
        result = await session.execute(
            select(User)
            .where(func.upper(User.role) == UserRole.ADMIN.value)
            .order_by(User.id)
            .limit(1)
        )
        existing = result.scalar_one_or_none()

        if existing:
            logger.info(f"Admin already exists: {existing.email}")
            return existing

        user = User(
            name="Admin",
            email=email,
            password_hash=hash_password(password),
            role=UserRole.ADMIN,
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)

        logger.info(f"Admin created: {user.email} (id={user.id})")
        return user


async def main():
    import app.models  # noqa: F401
    from app.core.database import engine, Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    user = await seed()
    print(f"  Email: {user.email}")
    print(f"  ID: {user.id}")
    print(f"\nPass this ID as admin_id on /api/v1/admin requests.")


if __name__ == "__main__":
    asyncio.run(main())
