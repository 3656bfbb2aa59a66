from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from uuid import UUID, uuid4

from pydantic import Field, field_validator

from .base import AppBaseModel, TimestampedModel


class ClientStatus(str, Enum):
    """Relationship stage of a client."""

    NEW = "new"
    REGULAR = "regular"
    VIP = "VIP"


class Sender(str, Enum):
    """Author of a conversation message."""

    USER = "user"
    ASSISTANT = "assistant"


class ConversationMessage(AppBaseModel):
    """A single entry in a client's conversation."""

    id: UUID = Field(default_factory=uuid4, description="Unique message identifier")
    content: str = Field(..., description="Message text")
    sender: Sender = Field(..., description="Who produced the message")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class Client(TimestampedModel):
    """Client roster entry with its conversation history."""

    id: UUID = Field(default_factory=uuid4, description="Unique client identifier")
    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    status: ClientStatus = Field(default=ClientStatus.NEW, description="Relationship stage")
    memo: str = Field(default="", max_length=2000, description="Free-form operator notes")
    messages: list[ConversationMessage] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Client name must not be blank")
        return stripped

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": str(uuid4()),
                    "name": "Yuki",
                    "status": "regular",
                    "memo": "Prefers short replies, busy on weekdays.",
                    "messages": [],
                }
            ]
        }
    }
