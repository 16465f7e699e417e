"""Text processing and per-user history endpoints."""

from fastapi import APIRouter, Depends, Query

from app.dependencies import get_ai_service
from app.schemas import HistoryEntry, Page, ProcessRequest, ProcessResponse
from app.services.ai_service import AIService

router = APIRouter()


@router.post("/process", response_model=ProcessResponse)
async def process_text(
    body: ProcessRequest,
    service: AIService = Depends(get_ai_service),
):
    """
    Summarize, rewrite or explain a piece of text.

    The request is stored in the caller's history. If the LLM is unreachable
    the response still succeeds and carries a placeholder message.
    """
    output = await service.process(body.text, body.action, body.user_id)
    return ProcessResponse(output=output)


@router.get("/history", response_model=Page[HistoryEntry])
async def get_history(
    user_id: int = Query(..., description="Owner of the history"),
    page: int = Query(0, ge=0),
    size: int = Query(5, ge=1),
    service: AIService = Depends(get_ai_service),
):
    """Get the caller's past requests, newest first."""
    return await service.get_history(user_id, page, size)


@router.delete("/history/{record_id}")
async def delete_history(
    record_id: int,
    service: AIService = Depends(get_ai_service),
):
    """Delete one history entry. Deleting an unknown id also succeeds."""
    await service.delete_history(record_id)
    return {"success": True}
