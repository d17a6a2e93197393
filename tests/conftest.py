"""Shared pytest fixtures."""

# Clear settings cache before any imports to prevent stale values
from policy_assistant.config import get_settings

get_settings.cache_clear()

import pytest
from unittest.mock import AsyncMock

from policy_assistant.schemas.conversation import ConversationMessage
from policy_assistant.schemas.tags import ExistingTag


@pytest.fixture
def mock_llm_client():
    """Create a mock LLM client."""
    client = AsyncMock()
    client.provider_name = "mock"
    client.model = "mock-model"
    client.generate_completion = AsyncMock(return_value="")
    return client


@pytest.fixture
def gdpr_messages():
    """A short user/assistant exchange about GDPR."""
    return [
        ConversationMessage(role="user", content="What is GDPR?"),
        ConversationMessage(
            role="assistant", content="GDPR is the General Data Protection Regulation..."
        ),
    ]


@pytest.fixture
def existing_tags():
    """The user's current tag vocabulary."""
    return [
        ExistingTag(id="1", name="GDPR", color="#8B5CF6"),
        ExistingTag(id="2", name="Privacy", color="#EC4899"),
    ]
