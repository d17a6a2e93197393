"""Tests for title and tag prompt templates."""

from policy_assistant.services.prompts import (
    TAG_SUGGESTIONS_RESPONSE_FORMAT,
    get_tag_suggestion_prompt,
    get_title_prompt,
)


class TestTitlePrompt:
    """Tests for get_title_prompt."""

    def test_first_title(self):
        system, user = get_title_prompt("USER: What is GDPR?", seed="abc123")

        assert system.endswith("Output ONLY the title, nothing else. (Seed: abc123)")
        assert "IMPORTANT" not in system
        assert user == "Generate a title for this conversation:\n\nUSER: What is GDPR?"

    def test_regeneration(self):
        system, user = get_title_prompt(
            "USER: What is GDPR?",
            seed="ff00aa",
            current_title="GDPR Basics",
            avoid_words=["GDPR", "Basics"],
            focus_angle="outcome",
        )

        assert 'The current title is "GDPR Basics"' in system
        assert "Does NOT reuse these words: GDPR, Basics" in system
        assert "Focuses on the outcome of the conversation" in system
        assert "(Seed: ff00aa)" in system
        assert user.startswith("Generate a NEW and DIFFERENT title")

    def test_seed_varies_prompt_only(self):
        first, user_a = get_title_prompt("USER: hi", seed="000001")
        second, user_b = get_title_prompt("USER: hi", seed="000002")

        assert first != second
        assert user_a == user_b


class TestTagSuggestionPrompt:
    """Tests for get_tag_suggestion_prompt."""

    def test_lists_existing_tags(self):
        system, user = get_tag_suggestion_prompt("User: hi", ["GDPR", "AI Ethics"])

        assert "Existing tags the user has created: GDPR, AI Ethics" in system
        assert '"suggestions"' in system
        assert user == "Analyze this conversation and suggest tags:\n\nUser: hi"

    def test_without_existing_tags(self):
        system, _ = get_tag_suggestion_prompt("User: hi", [])

        assert "Existing tags" not in system

    def test_response_format_requires_all_fields(self):
        item = TAG_SUGGESTIONS_RESPONSE_FORMAT["json_schema"]["schema"]["properties"]["suggestions"]["items"]

        assert TAG_SUGGESTIONS_RESPONSE_FORMAT["json_schema"]["strict"] is True
        assert item["required"] == ["name", "confidence", "reason"]
