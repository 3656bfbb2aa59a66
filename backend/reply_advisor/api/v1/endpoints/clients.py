from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TCH003

from fastapi import APIRouter, Depends, HTTPException, status

from reply_advisor.api.v1.schemas.chat import ChatResponse, ReplyRequest
from reply_advisor.api.v1.schemas.client import (
    ClientCreate,
    ClientRead,
    ClientUpdate,
    MessageCreate,
    MessageRead,
    SuggestionSelect,
)
from reply_advisor.dependencies import get_client_service, get_conversation_service

if TYPE_CHECKING:
    from reply_advisor.core.services.client_service import ClientService
    from reply_advisor.core.services.conversation_service import ConversationService

router = APIRouter()


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Client not found")


@router.get("/", response_model=list[ClientRead])
async def list_clients(service: ClientService = Depends(get_client_service)):
    clients = await service.list_clients()
    return [ClientRead.model_validate(c) for c in clients]


@router.post("/", response_model=ClientRead, status_code=status.HTTP_201_CREATED)
async def create_client(
    payload: ClientCreate,
    service: ClientService = Depends(get_client_service),
):
    try:
        client = await service.create_client(payload.name)
    except ValueError as err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err
    return ClientRead.model_validate(client)


@router.get("/{client_id}", response_model=ClientRead)
async def get_client(
    client_id: UUID,
    service: ClientService = Depends(get_client_service),
):
    client = await service.get_client(client_id)
    if not client:
        raise _not_found()
    return ClientRead.model_validate(client)


@router.patch("/{client_id}", response_model=ClientRead)
async def update_client(
    client_id: UUID,
    payload: ClientUpdate,
    service: ClientService = Depends(get_client_service),
):
    try:
        client = await service.update_client(client_id, payload)
    except ValueError as err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err
    if not client:
        raise _not_found()
    return ClientRead.model_validate(client)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(
    client_id: UUID,
    service: ClientService = Depends(get_client_service),
):
    deleted = await service.delete_client(client_id)
    if not deleted:
        raise _not_found()
    return None


@router.post("/{client_id}/messages", response_model=MessageRead, status_code=status.HTTP_201_CREATED)
async def append_message(
    client_id: UUID,
    payload: MessageCreate,
    service: ClientService = Depends(get_client_service),
):
    message = await service.append_message(client_id, payload.content, payload.sender)
    if not message:
        raise _not_found()
    return MessageRead.model_validate(message)


@router.post("/{client_id}/selection", response_model=MessageRead, status_code=status.HTTP_201_CREATED)
async def select_suggestion(
    client_id: UUID,
    payload: SuggestionSelect,
    service: ClientService = Depends(get_client_service),
):
    """Record the reply candidate the operator chose."""
    message = await service.select_suggestion(client_id, payload.text)
    if not message:
        raise _not_found()
    return MessageRead.model_validate(message)


@router.post("/{client_id}/chat", response_model=ChatResponse)
async def chat_with_client(
    client_id: UUID,
    payload: ReplyRequest,
    service: ConversationService = Depends(get_conversation_service),
):
    """Generate reply candidates using the client's stored history and profile."""
    result = await service.reply(client_id, message=payload.message, image=payload.image_input())
    if result is None:
        raise _not_found()
    raw, parsed = result
    return ChatResponse(suggestions=raw, parsed=parsed)
