"""Administrative operations over users and AI requests.

Callers are expected to have passed the admin gate
(``app.dependencies.require_admin``) before using this service.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import SelfDeletionForbidden, UserNotFound
from app.core.logging import logger
from app.models.user import User, UserRole
from app.repositories import ai_request_repository, user_repository
from app.schemas import AdminRequestEntry, AnalyticsResponse, Page, UserResponse

# Shown in place of the email when a request's owner has been deleted
UNKNOWN_OWNER = "Unknown"


class AdminService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_users(self, page: int = 0, size: int = 5) -> Page[UserResponse]:
        users, total = await user_repository.find_page(self.db, page, size)
        return Page[UserResponse].build(
            [UserResponse.model_validate(u) for u in users], page, size, total
        )

    async def delete_user(self, admin: User, user_id: int) -> None:
        if user_id == admin.id:
            raise SelfDeletionForbidden()

        if await user_repository.delete_by_id(self.db, user_id):
            logger.info(f"User {user_id} deleted by admin {admin.email}")

    async def change_role(self, admin: User, user_id: int, role: str) -> User:
        new_role = UserRole.parse(role.upper())

        user = await user_repository.find_by_id(self.db, user_id)
        if user is None:
            raise UserNotFound()

        user.role = new_role
        await self.db.flush()

        logger.info(f"Role of user {user.email} set to {new_role.value} by {admin.email}")
        return user

    async def list_requests(self, page: int = 0, size: int = 5) -> Page[AdminRequestEntry]:
        """All AI requests, newest first, each tagged with its owner's email."""
        records, total = await ai_request_repository.find_page(self.db, page, size)
        emails = await user_repository.find_emails(self.db, {r.user_id for r in records})

        content = [
            AdminRequestEntry(
                id=r.id,
                action=r.action,
                created_at=r.created_at,
                input_text=r.input_text,
                output=r.output,
                user_email=emails.get(r.user_id, UNKNOWN_OWNER),
            )
            for r in records
        ]
        return Page[AdminRequestEntry].build(content, page, size, total)

    async def delete_request(self, admin: User, record_id: int) -> None:
        if await ai_request_repository.delete_by_id(self.db, record_id):
            logger.info(f"AI request {record_id} deleted by admin {admin.email}")

    async def analytics(self) -> AnalyticsResponse:
        total_users = await user_repository.count_all(self.db)
        total_requests = await ai_request_repository.count_all(self.db)
        total_admins = await user_repository.count_by_role(self.db, UserRole.ADMIN)

        return AnalyticsResponse(
            total_users=total_users,
            total_requests=total_requests,
            total_admins=total_admins,
            total_normal_users=total_users - total_admins,
        )
