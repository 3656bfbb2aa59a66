from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from uuid import UUID  # noqa: TCH003

from pydantic import Field

from reply_advisor.core.models.base import AppBaseModel
from reply_advisor.core.models.client import ClientStatus, Sender  # noqa: TCH001


class ClientCreate(AppBaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Display name")


class ClientUpdate(AppBaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    status: ClientStatus | None = None
    memo: str | None = Field(default=None, max_length=2000)


class MessageCreate(AppBaseModel):
    content: str = Field(..., min_length=1, max_length=10000)
    sender: Sender = Field(default=Sender.USER)


class SuggestionSelect(AppBaseModel):
    text: str = Field(..., min_length=1, max_length=2000, description="Reply the operator picked")


class MessageRead(AppBaseModel):
    id: UUID
    content: str
    sender: Sender
    timestamp: datetime


class ClientRead(AppBaseModel):
    id: UUID
    name: str
    status: ClientStatus
    memo: str
    created_at: datetime
    messages: list[MessageRead]
