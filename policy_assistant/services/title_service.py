"""Conversation title generation service."""

from __future__ import annotations

import random
import re
import uuid
from typing import Sequence

from policy_assistant.clients.base_llm_client import BaseLLMClient
from policy_assistant.schemas.conversation import ConversationMessage
from policy_assistant.services.prompts import get_title_prompt
from policy_assistant.utils.logger import get_logger, truncate

log = get_logger(__name__)

DEFAULT_TITLE = "New Conversation"

MAX_CONTEXT_MESSAGES = 10
MAX_TITLE_LENGTH = 60
MAX_FALLBACK_LENGTH = 50
REGENERATE_ATTEMPTS = 3
TITLE_MAX_TOKENS = 50

FOCUS_ANGLES = ("topic", "action", "outcome", "context")
TITLE_DESCRIPTORS = ("Overview", "Summary", "Insights", "Review", "Analysis", "Notes", "Breakdown")

_LABEL_PREFIX = re.compile(r"^(?:new\s+)?title\s*:\s*", re.IGNORECASE)
_PARENTHETICAL = re.compile(r"\s*\([^)]*\)")
_NON_ALNUM = re.compile(r"[^a-z0-9]")
_QUOTES = "\"'“”‘’"


def has_enough_context_for_title(messages: Sequence[ConversationMessage]) -> bool:
    """True when the transcript has at least one user and one assistant turn."""
    roles = {m.role for m in messages}
    return "user" in roles and "assistant" in roles


def clean_title(raw: str) -> str:
    """Normalize a raw completion into a display title ("" if nothing usable remains)."""
    title = raw.strip()
    title = _LABEL_PREFIX.sub("", title)
    if title and title[0] in _QUOTES:
        title = title[1:]
    if title and title[-1] in _QUOTES:
        title = title[:-1]
    title = title.strip()
    if title and title[-1] in ".!?":
        title = title[:-1]
    title = _PARENTHETICAL.sub("", title)
    title = " ".join(title.split())

    if len(title) > MAX_TITLE_LENGTH:
        title = title[: MAX_TITLE_LENGTH - 3] + "..."
    return title


def normalize_title(title: str) -> str:
    """Lowercase and drop everything but letters and digits."""
    return _NON_ALNUM.sub("", title.lower())


def is_same_title(candidate: str, current: str) -> bool:
    return normalize_title(candidate) == normalize_title(current)


def first_user_message_fallback(messages: Sequence[ConversationMessage]) -> str:
    """First user message cut to 50 chars, or the default title."""
    for message in messages:
        if message.role == "user":
            content = message.content.strip()
            if not content:
                continue
            if len(content) > MAX_FALLBACK_LENGTH:
                return content[:MAX_FALLBACK_LENGTH] + "..."
            return content
    return DEFAULT_TITLE


def _significant_words(title: str) -> list[str]:
    return [w for w in re.findall(r"[A-Za-z0-9]+", title) if len(w) > 3]


def synthesize_title_variation(
    messages: Sequence[ConversationMessage],
    current_title: str,
    rng: random.Random | None = None,
) -> str:
    """
    Build a title that differs from ``current_title`` without calling the LLM.

    Prefers 2-3 transcript keywords (longer than 4 letters) absent from the
    current title; otherwise appends a descriptor to the first three words of
    the current title.

    Args:
        messages: Full conversation transcript
        current_title: Title the result must differ from
        rng: Random source (injectable for tests)

    Returns:
        A title that is not the same as ``current_title`` after normalization
    """
    rng = rng or random.Random()
    title_words = {w.lower() for w in re.findall(r"[A-Za-z0-9]+", current_title)}

    keywords: list[str] = []
    seen: set[str] = set()
    for message in messages:
        for word in re.findall(r"[A-Za-z]+", message.content):
            lowered = word.lower()
            if len(lowered) > 4 and lowered not in title_words and lowered not in seen:
                seen.add(lowered)
                keywords.append(lowered.capitalize())

    if len(keywords) >= 2:
        picked = rng.sample(keywords, k=min(3, len(keywords)))
        candidate = " ".join(picked)
        if not is_same_title(candidate, current_title):
            return clean_title(candidate)

    base = " ".join(current_title.split()[:3])
    descriptors = [d for d in TITLE_DESCRIPTORS if d.lower() not in title_words]
    rng.shuffle(descriptors)
    for descriptor in descriptors:
        candidate = clean_title(f"{base} {descriptor}".strip())
        if not is_same_title(candidate, current_title):
            return candidate

    # Every descriptor already appears in the title
    return clean_title(f"{descriptors[0] if descriptors else 'Revised'} {base}".strip())


def _render_transcript(messages: Sequence[ConversationMessage]) -> str:
    return "\n\n".join(
        f"{m.role.upper()}: {m.content}" for m in messages[:MAX_CONTEXT_MESSAGES]
    )


async def generate_conversation_title(
    llm_client: BaseLLMClient,
    messages: Sequence[ConversationMessage],
    current_title: str | None = None,
    *,
    model: str | None = None,
) -> str:
    """Generate a short 3-6 word title for a conversation.

    When ``current_title`` is given the result must differ from it: up to
    three sequential attempts, and a repeat of the current title consumes an
    attempt. Unless the current title is the default one, the prompt also
    names it, lists its words to avoid and asks for a different focus angle
    per attempt. If no attempt yields a new title, the first user message is
    used when it differs, otherwise a variation is synthesized locally.

    Never raises; LLM failures fall back to the first user message (or the
    default title) so callers can persist the result unconditionally.
    """
    if not messages:
        return DEFAULT_TITLE

    replacing = bool(current_title)
    regenerating = replacing and current_title != DEFAULT_TITLE
    attempts = REGENERATE_ATTEMPTS if replacing else 1
    conversation_text = _render_transcript(messages)
    avoid_words = _significant_words(current_title) if regenerating else []

    for attempt in range(attempts):
        focus_angle = FOCUS_ANGLES[attempt % len(FOCUS_ANGLES)]
        system_prompt, user_prompt = get_title_prompt(
            conversation_text,
            seed=uuid.uuid4().hex[:6],
            current_title=current_title if regenerating else None,
            avoid_words=avoid_words,
            focus_angle=focus_angle,
        )

        try:
            raw = await llm_client.generate_completion(
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                model=model,
                temperature=0.7 if regenerating else 0.3,
                max_tokens=TITLE_MAX_TOKENS,
            )
        except Exception:
            log.warning("title generation failed", attempt=attempt + 1, exc_info=True)
            continue

        title = clean_title(raw) if isinstance(raw, str) else ""
        if not title:
            log.warning("title generation returned empty content", attempt=attempt + 1)
            continue

        if replacing and is_same_title(title, current_title):  # type: ignore[arg-type]
            log.info(
                "title generation repeated current title",
                attempt=attempt + 1,
                focus_angle=focus_angle,
                title=title,
            )
            continue

        log.debug("title generated", title=title, attempt=attempt + 1)
        return title

    if not regenerating:
        fallback = first_user_message_fallback(messages)
        if not replacing or not is_same_title(fallback, current_title):  # type: ignore[arg-type]
            log.info("title fallback used", title=truncate(fallback, 60))
            return fallback

    title = synthesize_title_variation(messages, current_title)  # type: ignore[arg-type]
    log.info("title variation synthesized", current_title=current_title, title=title)
    return title
