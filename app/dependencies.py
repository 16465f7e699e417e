"""Password hashing, the admin gate and service wiring for the endpoints."""

from fastapi import Depends, Query
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.exceptions import AccessDenied, AdminNotFound
from app.core.logging import logger
from app.models.user import User
from app.repositories import user_repository
from app.services.admin_service import AdminService
from app.services.ai_service import AIService
from app.services.completion_client import CompletionClient, completion_client


# ─── Password hashing ───────────────────────────────────────────────────────

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a password against its bcrypt hash."""
    return pwd_context.verify(plain, hashed)


# ─── Admin gate ──────────────────────────────────────────────────────────────

async def require_admin(db: AsyncSession, admin_id: int) -> User:
    """Return the admin user, or fail with AdminNotFound / AccessDenied."""
    admin = await user_repository.find_by_id(db, admin_id)
    if admin is None:
        raise AdminNotFound()
    if not admin.is_admin:
        logger.warning(f"Admin access denied for user {admin_id} (role={admin.role.value})")
        raise AccessDenied()
    return admin


async def get_current_admin(
    admin_id: int = Query(..., description="Id of the admin performing the action"),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Dependency: gate an endpoint on the caller-supplied admin id."""
    return await require_admin(db, admin_id)


# ─── Services ────────────────────────────────────────────────────────────────

def get_completion_client() -> CompletionClient:
    return completion_client


def get_ai_service(
    db: AsyncSession = Depends(get_db),
    client: CompletionClient = Depends(get_completion_client),
) -> AIService:
    return AIService(db, client)


def get_admin_service(db: AsyncSession = Depends(get_db)) -> AdminService:
    return AdminService(db)
