"""Tag suggestion service.

Asks the LLM for tags describing a conversation, then validates and
normalizes whatever comes back. Existing tags are passed in by the caller and
are only read.
"""

from __future__ import annotations

import json
import math
from numbers import Real
from typing import Any, Optional, Sequence

from policy_assistant.clients.base_llm_client import BaseLLMClient
from policy_assistant.schemas.conversation import ConversationMessage
from policy_assistant.schemas.tags import (
    MAX_TAG_NAME_LENGTH,
    MAX_TAG_REASON_LENGTH,
    MAX_TAG_SUGGESTIONS,
    ExistingTag,
    SuggestTagsResult,
    TagSuggestion,
)
from policy_assistant.services.prompts import (
    TAG_SUGGESTIONS_RESPONSE_FORMAT,
    get_tag_suggestion_prompt,
)
from policy_assistant.utils.logger import get_logger, truncate

log = get_logger(__name__)

MAX_CONTEXT_CHARS = 3000
TAG_MAX_TOKENS = 500

NO_MESSAGES_ERROR = "No messages to analyze"
EMPTY_RESPONSE_ERROR = "Empty response from LLM"
NOT_AN_OBJECT_ERROR = "LLM response is not a JSON object"


def _render_transcript(messages: Sequence[ConversationMessage]) -> str:
    text = "\n".join(
        f"{'User' if m.role == 'user' else 'AI'}: {m.content}" for m in messages
    )
    return text[:MAX_CONTEXT_CHARS]


def normalize_suggestions(payload: Any) -> list[TagSuggestion]:
    """
    Validate raw LLM output into at most five sorted suggestions.

    Candidates without a name or without a finite numeric confidence are dropped
    rather than failing the whole batch.

    Args:
        payload: Decoded JSON, expected shape ``{"suggestions": [...]}``

    Returns:
        Suggestions sorted by confidence descending
    """
    raw_items = payload.get("suggestions") if isinstance(payload, dict) else None
    if not isinstance(raw_items, list):
        return []

    suggestions: list[TagSuggestion] = []
    for item in raw_items:
        if not isinstance(item, dict):
            continue

        name = item.get("name")
        confidence = item.get("confidence")
        if not name or isinstance(confidence, bool) or not isinstance(confidence, Real):
            continue

        name = str(name).strip()[:MAX_TAG_NAME_LENGTH].strip()
        if not name:
            continue

        try:
            confidence = float(confidence)
        except OverflowError:
            continue
        if not math.isfinite(confidence):
            continue

        reason = item.get("reason") or ""
        suggestions.append(
            TagSuggestion(
                name=name,
                confidence=max(0.0, min(1.0, confidence)),
                reason=str(reason)[:MAX_TAG_REASON_LENGTH],
            )
        )

    suggestions.sort(key=lambda s: s.confidence, reverse=True)
    return suggestions[:MAX_TAG_SUGGESTIONS]


async def suggest_tags_for_conversation(
    llm_client: BaseLLMClient,
    messages: Sequence[ConversationMessage],
    existing_tags: Sequence[ExistingTag],
    *,
    model: Optional[str] = None,
) -> SuggestTagsResult:
    """Suggest tags for a conversation, favoring the caller's existing vocabulary.

    Never raises: every failure is reported through ``success``/``error``.
    """
    if not messages:
        return SuggestTagsResult(suggestions=[], success=False, error=NO_MESSAGES_ERROR)

    system_prompt, user_prompt = get_tag_suggestion_prompt(
        _render_transcript(messages),
        [tag.name for tag in existing_tags],
    )

    try:
        content = await llm_client.generate_completion(
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            model=model,
            max_tokens=TAG_MAX_TOKENS,
            response_format=TAG_SUGGESTIONS_RESPONSE_FORMAT,
        )

        if not content or not isinstance(content, str):
            log.warning("tag suggestion empty response")
            return SuggestTagsResult(suggestions=[], success=False, error=EMPTY_RESPONSE_ERROR)

        payload = json.loads(content)
        if not isinstance(payload, dict):
            raise ValueError(NOT_AN_OBJECT_ERROR)
        suggestions = normalize_suggestions(payload)
    except Exception as e:
        log.error(
            "tag suggestion failed",
            error=str(e),
            error_type=type(e).__name__,
            exc_info=True,
        )
        return SuggestTagsResult(suggestions=[], success=False, error=str(e) or "Unknown error")

    log.debug(
        "tags suggested",
        count=len(suggestions),
        names=truncate(", ".join(s.name for s in suggestions), 200),
    )
    return SuggestTagsResult(suggestions=suggestions, success=True)


def find_matching_existing_tag(
    suggestion_name: str, existing_tags: Sequence[ExistingTag]
) -> Optional[ExistingTag]:
    """Return the existing tag whose name equals ``suggestion_name``, ignoring case and surrounding whitespace."""
    normalized = suggestion_name.strip().lower()
    for tag in existing_tags:
        if tag.name.strip().lower() == normalized:
            return tag
    return None
