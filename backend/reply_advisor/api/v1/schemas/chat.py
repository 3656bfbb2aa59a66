from __future__ import annotations

from pydantic import ConfigDict, Field, PrivateAttr, model_validator

from reply_advisor.config import settings
from reply_advisor.core.models.base import AppBaseModel
from reply_advisor.core.schemas.image import ImageInput
from reply_advisor.core.schemas.suggestion import ParsedReply  # noqa: TCH001


class ReplyRequest(AppBaseModel):
    """An incoming message to answer: text, a screenshot, or both."""

    # Unknown fields sent by older clients are ignored
    model_config = ConfigDict(extra="ignore")

    message: str | None = Field(default=None, max_length=10000, description="Message received from her")
    image: str | None = Field(
        default=None,
        description="Screenshot as raw base64 or a data URL; takes precedence over message",
    )

    _image: ImageInput | None = PrivateAttr(default=None)

    @model_validator(mode="after")
    def validate_message_or_image(self) -> ReplyRequest:
        if not (self.message or "").strip() and not self.image:
            raise ValueError("Either message or image must be provided")
        if self.image:
            self._image = ImageInput.from_payload(self.image, max_bytes=settings.max_image_bytes)
        return self

    def image_input(self) -> ImageInput | None:
        """Screenshot decoded once during validation, or None."""
        return self._image


class ChatRequest(ReplyRequest):
    """Stateless reply request; the caller supplies history and client profile."""

    conversation_history: str | None = Field(
        default=None,
        alias="conversationHistory",
        description="Prior conversation rendered as text",
    )
    client_context: str | None = Field(
        default=None,
        alias="clientContext",
        description="Optional client profile (name, status, memo)",
    )


class ChatResponse(AppBaseModel):
    """Raw model output plus its parsed form."""

    suggestions: str = Field(..., description="Raw model output")
    parsed: ParsedReply
