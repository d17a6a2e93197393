"""Conversation title router."""

from fastapi import APIRouter

from policy_assistant.dependencies import CurrentUserRequired, TitleLLMClientDep
from policy_assistant.schemas.conversation import (
    TitleContextRequest,
    TitleContextResponse,
    TitleRequest,
    TitleResponse,
)
from policy_assistant.services.title_service import (
    DEFAULT_TITLE,
    generate_conversation_title,
    has_enough_context_for_title,
)
from policy_assistant.utils.logger import get_logger

router = APIRouter()
log = get_logger(__name__)


@router.post("/conversations/title", response_model=TitleResponse)
async def generate_title(
    body: TitleRequest,
    llm_client: TitleLLMClientDep,
    current_user: CurrentUserRequired,
) -> TitleResponse:
    """
    Generate (or regenerate) a title for a conversation transcript.

    The caller persists the returned title on its conversation record.
    Passing ``current_title`` asks for a title different from it.
    """
    title = await generate_conversation_title(
        llm_client,
        body.messages,
        body.current_title,
    )
    regenerated = bool(body.current_title) and body.current_title != DEFAULT_TITLE

    log.info(
        "conversation title generated",
        clerk_id=current_user.clerk_id,
        messages=len(body.messages),
        regenerated=regenerated,
    )
    return TitleResponse(title=title, regenerated=regenerated)


@router.post("/conversations/title/context", response_model=TitleContextResponse)
async def check_title_context(
    body: TitleContextRequest,
    current_user: CurrentUserRequired,
) -> TitleContextResponse:
    """Whether the transcript is ready for a title (one user and one assistant turn)."""
    return TitleContextResponse(has_enough_context=has_enough_context_for_title(body.messages))
