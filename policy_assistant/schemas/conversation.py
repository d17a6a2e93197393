"""Conversation transcript schemas shared by the title and tag services."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

MAX_MESSAGES_PER_REQUEST = 500


class ConversationMessage(BaseModel):
    """One conversation turn, in conversational order."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str


class TitleRequest(BaseModel):
    """Request body for title generation."""

    messages: list[ConversationMessage] = Field(max_length=MAX_MESSAGES_PER_REQUEST)
    current_title: str | None = Field(
        default=None,
        max_length=200,
        description="Existing title to avoid when regenerating",
    )


class TitleResponse(BaseModel):
    """Generated title."""

    title: str
    regenerated: bool


class TitleContextRequest(BaseModel):
    """Request body for the title-readiness check."""

    messages: list[ConversationMessage] = Field(max_length=MAX_MESSAGES_PER_REQUEST)


class TitleContextResponse(BaseModel):
    """Whether the transcript has both a user and an assistant turn."""

    has_enough_context: bool
