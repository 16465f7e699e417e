"""User model and the role translation applied at the store boundary."""

import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import String, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from app.core.database import Base
from app.core.exceptions import InvalidRole
from app.core.logging import logger


class UserRole(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"

    @classmethod
    def parse(cls, value) -> "UserRole":
        """Case-insensitive lookup. Raises InvalidRole for anything else."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            candidate = value.strip().upper()
            if candidate in cls.__members__:
                return cls[candidate]
        raise InvalidRole(str(value))


class RoleType(TypeDecorator):
    """Stores ``UserRole`` as upper-case text.

    Writes reject unknown roles. Rows that already hold an unknown value
    (legacy data) are read back as USER.
    """

    impl = String(20)
    cache_ok = True

    def process_bind_param(self, value, dialect) -> Optional[str]:
        if value is None:
            return None
        return UserRole.parse(value).value

    def process_result_value(self, value, dialect) -> Optional[UserRole]:
        if value is None:
            return None
        try:
            return UserRole.parse(value)
        except InvalidRole:
            logger.warning(f"Unrecognized stored role '{value}', treating as USER")
            return UserRole.USER


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        RoleType(), nullable=False, default=UserRole.USER
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
