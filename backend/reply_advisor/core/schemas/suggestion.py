from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import Field

from reply_advisor.core.models.base import AppBaseModel


class Suggestion(AppBaseModel):
    """One reply candidate extracted from model output."""

    index: int = Field(..., description="Number written in the candidate marker")
    text: str = Field(..., description="Reply text to send")
    explanation: str = Field(default="", description="Remaining lines of the block")


class StructuredSuggestions(AppBaseModel):
    """Model output that contained at least one candidate marker."""

    kind: Literal["suggestions"] = "suggestions"
    items: list[Suggestion]


class PlainText(AppBaseModel):
    """Model output without candidate markers, shown as a regular message."""

    kind: Literal["plain_text"] = "plain_text"
    text: str


ParsedReply = Annotated[Union[StructuredSuggestions, PlainText], Field(discriminator="kind")]
