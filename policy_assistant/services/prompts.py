"""Prompt templates for conversation titles and tag suggestions."""

from __future__ import annotations

from typing import Any

# System prompt constants
TITLE_SYSTEM_PROMPT = """You are a title generator for conversation histories. Your task is to create short, descriptive titles that capture the essence of a conversation.

RULES:
1. Title MUST be 3-6 words only
2. NO filler words (like "Discussion about", "Conversation on", "Help with")
3. NO full sentences or punctuation at the end
4. Capture the PRIMARY intent or outcome
5. Make it SEARCHABLE - use specific keywords
6. Differentiate from similar topics

EXAMPLES:
- Good: "AI Policy Compliance Check"
- Good: "GDPR Data Retention Rules"
- Good: "Model Training Guidelines"
- Good: "Platform Terms Analysis"
- Bad: "Discussion about calendar issues" (too long, has filler)
- Bad: "Help" (too vague)
- Bad: "A conversation about AI policies and regulations" (too long, sentence format)"""

TITLE_REGENERATE_INSTRUCTIONS = """

IMPORTANT: The current title is "{current_title}". You MUST generate a COMPLETELY DIFFERENT title that:
- Does NOT reuse these words: {avoid_words}
- Focuses on the {focus_angle} of the conversation rather than what the current title covers
- Provides a fresh perspective on the conversation topic"""

TITLE_OUTPUT_INSTRUCTIONS = """

Output ONLY the title, nothing else. (Seed: {seed})"""

TAG_SYSTEM_PROMPT = """You are a conversation tagging assistant. Analyze the conversation and suggest 2-4 relevant tags that would help organize and categorize it.

Guidelines:
- Suggest tags that capture the main topics, themes, or categories discussed
- Tags should be concise (1-3 words each)
- Prioritize suggesting from existing tags when they fit well
- Also suggest new tags if the conversation covers topics not in existing tags
- Focus on policy-related categories like: regulations, compliance, ethics, privacy, AI governance, platform terms, legal, etc.
- Each tag should have a confidence score (0.0-1.0) and a brief reason"""

TAG_EXISTING_TAGS_CONTEXT = "\n\nExisting tags the user has created: {tag_names}"

TAG_OUTPUT_INSTRUCTIONS = """

Respond in JSON format:
{
  "suggestions": [
    {"name": "tag name", "confidence": 0.9, "reason": "brief explanation"}
  ]
}"""

TAG_SUGGESTIONS_RESPONSE_FORMAT: dict[str, Any] = {
    "type": "json_schema",
    "json_schema": {
        "name": "tag_suggestions",
        "strict": True,
        "schema": {
            "type": "object",
            "properties": {
                "suggestions": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "name": {"type": "string", "description": "The tag name (1-3 words)"},
                            "confidence": {
                                "type": "number",
                                "description": "Confidence score 0.0-1.0",
                            },
                            "reason": {
                                "type": "string",
                                "description": "Brief explanation for this suggestion",
                            },
                        },
                        "required": ["name", "confidence", "reason"],
                        "additionalProperties": False,
                    },
                }
            },
            "required": ["suggestions"],
            "additionalProperties": False,
        },
    },
}


def get_title_prompt(
    conversation_text: str,
    seed: str,
    current_title: str | None = None,
    avoid_words: list[str] | None = None,
    focus_angle: str = "topic",
) -> tuple[str, str]:
    """Generate the title prompt.

    Args:
        conversation_text: Rendered "ROLE: content" transcript
        seed: Opaque nonce embedded to discourage identical completions
        current_title: Title to move away from; None for a first title
        avoid_words: Significant words of the current title
        focus_angle: Aspect of the conversation to emphasize when regenerating

    Returns:
        Tuple of (system_prompt, user_prompt)
    """
    system = TITLE_SYSTEM_PROMPT

    if current_title:
        system += TITLE_REGENERATE_INSTRUCTIONS.format(
            current_title=current_title,
            avoid_words=", ".join(avoid_words) if avoid_words else "(none)",
            focus_angle=focus_angle,
        )

    system += TITLE_OUTPUT_INSTRUCTIONS.format(seed=seed)

    qualifier = "NEW and DIFFERENT " if current_title else ""
    user = f"Generate a {qualifier}title for this conversation:\n\n{conversation_text}"

    return system, user


def get_tag_suggestion_prompt(
    conversation_text: str, existing_tag_names: list[str]
) -> tuple[str, str]:
    """Generate the tag suggestion prompt.

    Args:
        conversation_text: Rendered "User:/AI:" transcript, already truncated
        existing_tag_names: Names of the user's current tags

    Returns:
        Tuple of (system_prompt, user_prompt)
    """
    system = TAG_SYSTEM_PROMPT
    if existing_tag_names:
        system += TAG_EXISTING_TAGS_CONTEXT.format(tag_names=", ".join(existing_tag_names))
    system += TAG_OUTPUT_INSTRUCTIONS

    user = f"Analyze this conversation and suggest tags:\n\n{conversation_text}"
    return system, user
