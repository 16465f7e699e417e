"""Admin endpoints for managing users and AI requests."""

from fastapi import APIRouter, Depends, Query, Response, status

from app.dependencies import get_admin_service, get_current_admin
from app.models.user import User
from app.schemas import (
    AdminRequestEntry,
    AnalyticsResponse,
    Page,
    RoleChange,
    UserResponse,
)
from app.services.admin_service import AdminService

router = APIRouter()


# ─── Users ───────────────────────────────────────────────────────────────────

@router.get("/users", response_model=Page[UserResponse])
async def list_users(
    page: int = Query(0, ge=0),
    size: int = Query(5, ge=1),
    current_admin: User = Depends(get_current_admin),
    service: AdminService = Depends(get_admin_service),
):
    """List users ordered by id (admin only)."""
    return await service.list_users(page, size)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    current_admin: User = Depends(get_current_admin),
    service: AdminService = Depends(get_admin_service),
):
    """Delete a user (admin only). Admins cannot delete themselves."""
    await service.delete_user(current_admin, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/users/{user_id}/role")
async def change_user_role(
    user_id: int,
    data: RoleChange,
    current_admin: User = Depends(get_current_admin),
    service: AdminService = Depends(get_admin_service),
):
    """Change a user's role (admin only)."""
    await service.change_role(current_admin, user_id, data.role)
    return {"message": "Role updated"}


# ─── AI requests ─────────────────────────────────────────────────────────────

@router.get("/requests", response_model=Page[AdminRequestEntry])
async def list_requests(
    page: int = Query(0, ge=0),
    size: int = Query(5, ge=1),
    current_admin: User = Depends(get_current_admin),
    service: AdminService = Depends(get_admin_service),
):
    """List every AI request, newest first, with the owner's email (admin only)."""
    return await service.list_requests(page, size)


@router.delete("/requests/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_request(
    record_id: int,
    current_admin: User = Depends(get_current_admin),
    service: AdminService = Depends(get_admin_service),
):
    """Delete an AI request (admin only)."""
    await service.delete_request(current_admin, record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ─── Analytics ───────────────────────────────────────────────────────────────

@router.get("/analytics", response_model=AnalyticsResponse)
async def get_analytics(
    current_admin: User = Depends(get_current_admin),
    service: AdminService = Depends(get_admin_service),
):
    """User and request totals (admin only)."""
    return await service.analytics()
