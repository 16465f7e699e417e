"""AI processing pipeline: prompt → completion → history record."""

from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AuthenticationRequired
from app.core.logging import logger
from app.models.ai_request import AIRequest
from app.repositories import ai_request_repository
from app.schemas import HistoryEntry, Page
from app.services.completion_client import CompletionClient, CompletionResult
from app.services.prompt_builder import build_prompt


class AIService:
    """Processes text for a user and manages their request history."""

    def __init__(self, db: AsyncSession, client: CompletionClient):
        self.db = db
        self.client = client

    async def run(self, text: str, action: str, user_id: Optional[int]) -> CompletionResult:
        """
        Build the prompt, call the LLM and persist the outcome.

        Returns the raw completion result so callers can tell a degraded
        answer from a real one; ``process`` collapses it to text.
        """
        if user_id is None:
            raise AuthenticationRequired()

        prompt = build_prompt(text, action)
        result = await self.client.complete(prompt)

        record = AIRequest(
            input_text=text,
            action=action,
            output=result.text,
            user_id=user_id,
            created_at=datetime.utcnow(),
        )
        record = await ai_request_repository.save(self.db, record)

        logger.info(
            f"AI request {record.id} saved for user {user_id} "
            f"(action={action}, {type(result).__name__.lower()})"
        )
        return result

    async def process(self, text: str, action: str, user_id: Optional[int]) -> str:
        result = await self.run(text, action, user_id)
        return result.text

    async def get_history(self, user_id: int, page: int = 0, size: int = 5) -> Page[HistoryEntry]:
        records, total = await ai_request_repository.find_page(
            self.db, page, size, owner_id=user_id
        )
        return Page[HistoryEntry].build(
            [HistoryEntry.model_validate(r) for r in records], page, size, total
        )

    async def delete_history(self, record_id: int) -> None:
        if await ai_request_repository.delete_by_id(self.db, record_id):
            logger.info(f"AI request {record_id} deleted")
