"""Test doubles shared across the suite."""

from __future__ import annotations

import base64
from types import SimpleNamespace
from typing import TYPE_CHECKING

from reply_advisor.core.repositories.client_repository import ClientRepository

if TYPE_CHECKING:
    from collections.abc import Sequence

    from reply_advisor.core.models.client import Client

AUTH_USER = "operator"
AUTH_PASSWORD = "s3cret:with-colon"


def basic_auth_header(user: str = AUTH_USER, password: str = AUTH_PASSWORD) -> dict[str, str]:
    token = base64.b64encode(f"{user}:{password}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


class FakeResponses:
    """Stand-in for `AsyncOpenAI.responses` recording every call."""

    def __init__(self, output_text: str | None = "", error: Exception | None = None) -> None:
        self.output_text = output_text
        self.error = error
        self.calls: list[dict] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(output_text=self.output_text)


class FakeOpenAI:
    def __init__(self, output_text: str | None = "", error: Exception | None = None) -> None:
        self.responses = FakeResponses(output_text, error)


class InMemoryClientRepository(ClientRepository):
    def __init__(self) -> None:
        self.saved: list[Client] = []
        self.save_count = 0

    async def get_all(self) -> list[Client]:
        return [c.model_copy(deep=True) for c in self.saved]

    async def save_all(self, clients: Sequence[Client]) -> None:
        self.saved = [c.model_copy(deep=True) for c in clients]
        self.save_count += 1
