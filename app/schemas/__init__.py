"""Pydantic schemas for request/response validation."""

import math
from typing import Generic, List, Optional, TypeVar
from datetime import datetime

from pydantic import BaseModel, Field

from app.models.user import UserRole

T = TypeVar("T")


# ─── Pagination ──────────────────────────────────────────────────────────────

class Page(BaseModel, Generic[T]):
    content: List[T]
    page: int
    size: int
    total_elements: int
    total_pages: int

    @classmethod
    def build(cls, content: List[T], page: int, size: int, total: int) -> "Page[T]":
        return cls(
            content=content,
            page=page,
            size=size,
            total_elements=total,
            total_pages=math.ceil(total / size) if size else 0,
        )


# ─── Accounts ────────────────────────────────────────────────────────────────

class UserCreate(BaseModel):
    name: str
    email: str
    password: str


class UserLogin(BaseModel):
    email: str
    password: str


class UserUpdate(BaseModel):
    id: int
    name: str
    email: str
    password: Optional[str] = None


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: UserRole
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RoleChange(BaseModel):
    role: str


# ─── AI processing ───────────────────────────────────────────────────────────

class ProcessRequest(BaseModel):
    text: str
    action: str
    user_id: Optional[int] = None


class ProcessResponse(BaseModel):
    output: str


class HistoryEntry(BaseModel):
    id: int
    input: str = Field(validation_alias="input_text")
    output: str
    created_at: datetime
    action: str

    class Config:
        from_attributes = True
        populate_by_name = True


class AdminRequestEntry(BaseModel):
    id: int
    action: str
    created_at: datetime
    input_text: str
    output: str
    user_email: str


# ─── Analytics ───────────────────────────────────────────────────────────────

class AnalyticsResponse(BaseModel):
    total_users: int
    total_requests: int
    total_admins: int
    total_normal_users: int
