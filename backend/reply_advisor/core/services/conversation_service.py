from __future__ import annotations

from typing import TYPE_CHECKING

from reply_advisor.core.errors import ModelGatewayError
from reply_advisor.core.models.client import Sender
from reply_advisor.core.schemas.suggestion import PlainText
from reply_advisor.core.services.client_service import (
    ERROR_PREFIX,
    SCREENSHOT_PLACEHOLDER,
    client_context,
    conversation_history,
)
from reply_advisor.core.services.suggestion_parser import parse_reply
from reply_advisor.utils.logging import get_logger

if TYPE_CHECKING:
    from uuid import UUID

    from reply_advisor.core.schemas.image import ImageInput
    from reply_advisor.core.schemas.suggestion import ParsedReply
    from reply_advisor.core.services.client_service import ClientService
    from reply_advisor.core.services.reply_service import ReplyService

logger = get_logger(__name__)


class ConversationService:
    """Runs a reply request in the context of a roster client and records the exchange."""

    def __init__(self, client_service: ClientService, reply_service: ReplyService) -> None:
        self._clients = client_service
        self._replies = reply_service

    async def reply(
        self,
        client_id: str | UUID,
        *,
        message: str | None,
        image: ImageInput | None,
    ) -> tuple[str, ParsedReply] | None:
        """Return (raw output, parsed reply), or None when the client does not exist.

        History and profile are taken before the new message is stored. Plain
        text output is stored as an assistant message; suggestion lists are not
        stored until one is selected. A gateway failure is stored as an error
        message and re-raised.
        """
        client = await self._clients.get_client(client_id)
        if client is None:
            return None

        history = conversation_history(client)
        context = client_context(client)

        user_content = SCREENSHOT_PLACEHOLDER if image is not None else (message or "")
        await self._clients.append_message(client.id, user_content, Sender.USER)

        try:
            raw = await self._replies.generate(
                message=message,
                image=image,
                conversation_history=history,
                client_context=context,
            )
        except ModelGatewayError as err:
            await self._clients.append_message(client.id, f"{ERROR_PREFIX}: {err}", Sender.ASSISTANT)
            raise

        parsed = parse_reply(raw)
        if isinstance(parsed, PlainText):
            await self._clients.append_message(client.id, parsed.text, Sender.ASSISTANT)
        else:
            logger.info(
                "Generated reply candidates",
                extra={"client_id": str(client.id), "count": len(parsed.items)},
            )
        return raw, parsed
