from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends

from reply_advisor.config import settings
from reply_advisor.core.repositories.implementations.json_file.client_repository import (
    JsonFileClientRepository,
)
from reply_advisor.core.services.client_service import ClientService
from reply_advisor.core.services.model_gateway import ModelGateway
from reply_advisor.core.services.reply_service import ReplyService
from reply_advisor.utils.openai_client import get_openai_client

if TYPE_CHECKING:
    from openai import AsyncOpenAI

    from reply_advisor.core.repositories.client_repository import ClientRepository
    from reply_advisor.core.services.conversation_service import ConversationService


def get_model_gateway(client: AsyncOpenAI = Depends(get_openai_client)) -> ModelGateway:
    """Gateway bound to the shared OpenAI client.

    Resolving the client raises ModelConfigurationError when the API key is
    missing, so the request is rejected before any corpus or network work.
    """
    return ModelGateway(client, settings.reply_model)


def get_reply_service(gateway: ModelGateway = Depends(get_model_gateway)) -> ReplyService:
    """Get a request-scoped reply service reading the configured corpus."""
    return ReplyService(
        gateway,
        corpus_dir=settings.corpus_dir,
        manual_filename=settings.corpus_manual_filename,
        max_corpus_chars=settings.corpus_max_chars,
        chunk_bytes=settings.corpus_chunk_bytes,
    )


def get_client_repository() -> ClientRepository:
    """Get the roster repository for the configured file."""
    return JsonFileClientRepository(settings.roster_path)


def get_client_service(repo: ClientRepository = Depends(get_client_repository)) -> ClientService:
    """Get a request-scoped client service instance."""
    return ClientService(repo)


def get_conversation_service(
    client_service: ClientService = Depends(get_client_service),
    reply_service: ReplyService = Depends(get_reply_service),
) -> ConversationService:
    """Construct ConversationService from the roster and reply services."""
    from reply_advisor.core.services.conversation_service import ConversationService

    return ConversationService(client_service, reply_service)
