"""SQLAlchemy models package."""

from app.models.user import User, UserRole
from app.models.ai_request import AIRequest

__all__ = ["User", "UserRole", "AIRequest"]
