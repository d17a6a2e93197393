"""Tag suggestion router."""

from fastapi import APIRouter

from policy_assistant.dependencies import CurrentUserRequired, TagLLMClientDep
from policy_assistant.schemas.tags import (
    MatchTagRequest,
    MatchTagResponse,
    SuggestedTagItem,
    SuggestTagsRequest,
    SuggestTagsResponse,
)
from policy_assistant.services.tag_suggestion_service import (
    find_matching_existing_tag,
    suggest_tags_for_conversation,
)
from policy_assistant.utils.logger import get_logger

router = APIRouter()
log = get_logger(__name__)


@router.post("/tags/suggest", response_model=SuggestTagsResponse)
async def suggest_tags(
    body: SuggestTagsRequest,
    llm_client: TagLLMClientDep,
    current_user: CurrentUserRequired,
) -> SuggestTagsResponse:
    """
    Suggest tags for a conversation.

    Failures are reported in the body (``success=false``) with status 200 so
    the UI can simply hide the suggestions panel. Each suggestion carries the
    id of the user's existing tag with the same name, if there is one.
    """
    result = await suggest_tags_for_conversation(
        llm_client,
        body.messages,
        body.existing_tags,
    )

    items = []
    for suggestion in result.suggestions:
        match = find_matching_existing_tag(suggestion.name, body.existing_tags)
        items.append(
            SuggestedTagItem(
                **suggestion.model_dump(),
                existing_tag_id=match.id if match else None,
            )
        )

    log.info(
        "tags suggested",
        clerk_id=current_user.clerk_id,
        success=result.success,
        count=len(items),
        matched=sum(1 for i in items if i.existing_tag_id),
    )
    return SuggestTagsResponse(suggestions=items, success=result.success, error=result.error)


@router.post("/tags/match", response_model=MatchTagResponse)
async def match_tag(
    body: MatchTagRequest,
    current_user: CurrentUserRequired,
) -> MatchTagResponse:
    """Find the existing tag with the same name (case and surrounding whitespace ignored)."""
    return MatchTagResponse(match=find_matching_existing_tag(body.name, body.existing_tags))
