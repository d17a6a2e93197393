"""Tag schemas: caller vocabulary, LLM suggestions and API payloads."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from policy_assistant.schemas.conversation import (
    MAX_MESSAGES_PER_REQUEST,
    ConversationMessage,
)

MAX_TAG_NAME_LENGTH = 30
MAX_TAG_REASON_LENGTH = 100
MAX_TAG_SUGGESTIONS = 5


class ExistingTag(BaseModel):
    """A tag the user already owns. Never modified by the services."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    color: str


class TagSuggestion(BaseModel):
    """A normalized tag suggestion."""

    name: str = Field(max_length=MAX_TAG_NAME_LENGTH)
    confidence: float = Field(ge=0.0, le=1.0)
    reason: str = Field(default="", max_length=MAX_TAG_REASON_LENGTH)


class SuggestTagsResult(BaseModel):
    """Outcome of a tag suggestion run. ``error`` is set only on failure."""

    suggestions: list[TagSuggestion] = Field(default_factory=list)
    success: bool
    error: Optional[str] = None


class SuggestTagsRequest(BaseModel):
    """Request body for tag suggestion."""

    messages: list[ConversationMessage] = Field(max_length=MAX_MESSAGES_PER_REQUEST)
    existing_tags: list[ExistingTag] = Field(default_factory=list)


class SuggestedTagItem(TagSuggestion):
    """Suggestion annotated with the id of the matching existing tag, if any."""

    existing_tag_id: Optional[str] = None


class SuggestTagsResponse(BaseModel):
    """Response body for tag suggestion."""

    suggestions: list[SuggestedTagItem]
    success: bool
    error: Optional[str] = None


class MatchTagRequest(BaseModel):
    """Request body for reconciling a tag name against the vocabulary."""

    name: str = Field(min_length=1, max_length=200)
    existing_tags: list[ExistingTag] = Field(default_factory=list)


class MatchTagResponse(BaseModel):
    """Matching existing tag, or null."""

    match: Optional[ExistingTag] = None
