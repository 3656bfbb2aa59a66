"""Tests for client-scoped reply generation."""

from __future__ import annotations

import asyncio
from uuid import uuid4

import pytest

from reply_advisor.core.errors import ModelGatewayError
from reply_advisor.core.models.client import Sender
from reply_advisor.core.schemas.image import ImageInput
from reply_advisor.core.schemas.suggestion import PlainText, StructuredSuggestions
from reply_advisor.core.services.client_service import ClientService
from reply_advisor.core.services.conversation_service import ConversationService


class FakeReplyService:
    def __init__(self, output: str = "", error: Exception | None = None) -> None:
        self.output = output
        self.error = error
        self.calls: list[dict] = []

    async def generate(self, **kwargs) -> str:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def clients(memory_repo):
    return ClientService(memory_repo)


def _setup(clients, replies):
    client = asyncio.run(clients.create_client("Yuki"))
    asyncio.run(clients.append_message(client.id, "earlier", Sender.USER))
    return client, ConversationService(clients, replies)


def test_history_taken_before_new_message(clients):
    replies = FakeReplyService("[candidate 1]\nreply")
    client, service = _setup(clients, replies)

    asyncio.run(service.reply(client.id, message="new one", image=None))

    call = replies.calls[0]
    assert call["conversation_history"] == "User: earlier"
    assert call["client_context"] == "Client: Yuki (new)\nMemo: none"
    assert call["message"] == "new one"


def test_suggestions_not_stored(clients):
    client, service = _setup(clients, FakeReplyService("[candidate 1]\nreply"))

    raw, parsed = asyncio.run(service.reply(client.id, message="new one", image=None))

    assert raw == "[candidate 1]\nreply"
    assert isinstance(parsed, StructuredSuggestions)
    stored = asyncio.run(clients.get_client(client.id))
    assert [m.content for m in stored.messages] == ["earlier", "new one"]


def test_plain_text_stored_as_assistant_message(clients):
    client, service = _setup(clients, FakeReplyService("Tell me more."))

    _, parsed = asyncio.run(service.reply(client.id, message="new one", image=None))

    assert parsed == PlainText(text="Tell me more.")
    stored = asyncio.run(clients.get_client(client.id))
    assert stored.messages[-1].content == "Tell me more."
    assert stored.messages[-1].sender is Sender.ASSISTANT


def test_screenshot_recorded_with_placeholder(clients):
    replies = FakeReplyService("[candidate 1]\nreply")
    client, service = _setup(clients, replies)
    image = ImageInput(data="aGVsbG8=")

    asyncio.run(service.reply(client.id, message=None, image=image))

    stored = asyncio.run(clients.get_client(client.id))
    assert stored.messages[-1].content == "[Screenshot sent]"
    assert replies.calls[0]["image"] == image


def test_gateway_error_recorded_and_reraised(clients):
    error = ModelGatewayError("Failed to generate replies: timeout")
    client, service = _setup(clients, FakeReplyService(error=error))

    with pytest.raises(ModelGatewayError):
        asyncio.run(service.reply(client.id, message="new one", image=None))

    stored = asyncio.run(clients.get_client(client.id))
    assert stored.messages[-1].content == "Error: Failed to generate replies: timeout"
    assert stored.messages[-1].sender is Sender.ASSISTANT


def test_unknown_client(clients):
    replies = FakeReplyService("x")
    service = ConversationService(clients, replies)

    assert asyncio.run(service.reply(uuid4(), message="hi", image=None)) is None
    assert replies.calls == []
