from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends

from reply_advisor.api.v1.schemas.chat import ChatRequest, ChatResponse
from reply_advisor.core.services.suggestion_parser import parse_reply
from reply_advisor.dependencies import get_reply_service

if TYPE_CHECKING:
    from reply_advisor.core.services.reply_service import ReplyService

router = APIRouter(
    responses={
        500: {"description": "Model not configured or model request failed"},
    }
)


@router.post("", response_model=ChatResponse)
async def generate_replies(
    payload: ChatRequest,
    service: ReplyService = Depends(get_reply_service),
):
    """Generate reply candidates for a text message or a screenshot."""
    raw = await service.generate(
        message=payload.message,
        image=payload.image_input(),
        conversation_history=payload.conversation_history,
        client_context=payload.client_context,
    )
    return ChatResponse(suggestions=raw, parsed=parse_reply(raw))
