from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from reply_advisor.core.models.client import Client, ClientStatus, ConversationMessage, Sender

if TYPE_CHECKING:
    from collections.abc import Sequence

    from reply_advisor.core.repositories.client_repository import ClientRepository

SCREENSHOT_PLACEHOLDER = "[Screenshot sent]"
SELECTED_REPLY_PREFIX = "[Selected reply]"
ERROR_PREFIX = "Error"

_HISTORY_LABELS = {Sender.USER: "User", Sender.ASSISTANT: "AI"}


def conversation_history(client: Client) -> str:
    """Render the client's messages as `User: ...` / `AI: ...` lines."""
    return "\n".join(f"{_HISTORY_LABELS[m.sender]}: {m.content}" for m in client.messages)


def client_context(client: Client) -> str:
    """Short profile passed to the model alongside the history."""
    return f"Client: {client.name} ({client.status.value})\nMemo: {client.memo or 'none'}"


class ClientService:
    """Roster operations. Every mutation saves the whole collection."""

    def __init__(self, repo: ClientRepository) -> None:
        self._repo = repo

    @staticmethod
    def _parse_id(client_id: str | UUID) -> UUID | None:
        try:
            return UUID(str(client_id))
        except ValueError:
            return None

    @staticmethod
    def _index_of(clients: Sequence[Client], client_id: UUID) -> int | None:
        for i, client in enumerate(clients):
            if client.id == client_id:
                return i
        return None

    async def list_clients(self) -> list[Client]:
        """Return clients newest first."""
        return await self._repo.get_all()

    async def create_client(self, name: str) -> Client:
        client = Client(name=name, status=ClientStatus.NEW, memo="")
        clients = await self._repo.get_all()
        await self._repo.save_all([client, *clients])
        return client

    async def get_client(self, client_id: str | UUID) -> Client | None:
        cid = self._parse_id(client_id)
        if cid is None:
            return None
        clients = await self._repo.get_all()
        idx = self._index_of(clients, cid)
        return clients[idx] if idx is not None else None

    async def update_client(self, client_id: str | UUID, update_dto) -> Client | None:
        """Apply a partial update of name, status or memo."""
        cid = self._parse_id(client_id)
        if cid is None:
            return None
        clients = await self._repo.get_all()
        idx = self._index_of(clients, cid)
        if idx is None:
            return None

        allowed_fields = {"name", "status", "memo"}
        changes = {
            k: v for k, v in update_dto.model_dump(exclude_unset=True).items()
            if k in allowed_fields and v is not None
        }
        if not changes:
            return clients[idx]

        # Re-validate so the merged record obeys the model constraints
        updated = Client.model_validate({**clients[idx].model_dump(), **changes})
        clients[idx] = updated
        await self._repo.save_all(clients)
        return updated

    async def delete_client(self, client_id: str | UUID) -> bool:
        cid = self._parse_id(client_id)
        if cid is None:
            return False
        clients = await self._repo.get_all()
        remaining = [c for c in clients if c.id != cid]
        if len(remaining) == len(clients):
            return False
        await self._repo.save_all(remaining)
        return True

    async def append_message(
        self, client_id: str | UUID, content: str, sender: Sender
    ) -> ConversationMessage | None:
        """Append a message to the client's conversation; None if the client is missing."""
        cid = self._parse_id(client_id)
        if cid is None:
            return None
        clients = await self._repo.get_all()
        idx = self._index_of(clients, cid)
        if idx is None:
            return None

        message = ConversationMessage(content=content, sender=sender)
        clients[idx].messages.append(message)
        await self._repo.save_all(clients)
        return message

    async def select_suggestion(self, client_id: str | UUID, text: str) -> ConversationMessage | None:
        """Record the reply the operator picked as an assistant message."""
        return await self.append_message(
            client_id, f"{SELECTED_REPLY_PREFIX}\n{text}", Sender.ASSISTANT
        )
