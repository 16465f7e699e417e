"""Account endpoints: signup, login, profile update and self-delete."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.exceptions import Conflict, InvalidCredentials, UserNotFound
from app.core.logging import logger
from app.dependencies import hash_password, verify_password
from app.models.user import User, UserRole
from app.repositories import user_repository
from app.schemas import UserCreate, UserLogin, UserResponse, UserUpdate

router = APIRouter()


@router.post("/signup", response_model=UserResponse)
async def signup(
    data: UserCreate,
    db: AsyncSession = Depends(get_db),
):
    """Register a new account with the USER role."""
    if await user_repository.find_by_email(db, data.email):
        raise Conflict("Email already registered")

    user = User(
        name=data.name,
        email=data.email,
        password_hash=hash_password(data.password),
        role=UserRole.USER,
    )
    user = await user_repository.save(db, user)

    logger.info(f"New user registered: {user.email}")
    return user


@router.post("/login", response_model=UserResponse)
async def login(
    data: UserLogin,
    db: AsyncSession = Depends(get_db),
):
    """Check credentials and return the user's profile."""
    user = await user_repository.find_by_email(db, data.email)

    if not user or not verify_password(data.password, user.password_hash):
        raise InvalidCredentials()

    logger.info(f"User logged in: {user.email}")
    return user


@router.put("/update", response_model=UserResponse)
async def update_user(
    data: UserUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update name and email; the password only changes when a new one is given."""
    user = await user_repository.find_by_id(db, data.id)
    if not user:
        raise UserNotFound()

    if data.email != user.email:
        other = await user_repository.find_by_email(db, data.email)
        if other and other.id != user.id:
            raise Conflict("Email already registered")

    user.name = data.name
    user.email = data.email
    if data.password and data.password.strip():
        user.password_hash = hash_password(data.password)

    await db.flush()
    await db.refresh(user)

    logger.info(f"User updated: {user.email}")
    return user


@router.delete("/delete/{user_id}")
async def delete_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Delete an account. The user's AI history is kept."""
    if await user_repository.delete_by_id(db, user_id):
        logger.info(f"User {user_id} deleted their account")
    return {"message": "User deleted successfully"}
