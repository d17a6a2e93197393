"""Shared pytest fixtures for router integration tests."""

import pytest
from unittest.mock import AsyncMock

from fastapi.testclient import TestClient

from policy_assistant.config import Settings
from policy_assistant.services.auth_service import AuthenticatedUser


@pytest.fixture
def mock_title_llm_client():
    """LLM client used by the title endpoint."""
    client = AsyncMock()
    client.provider_name = "openai"
    client.model = "openai/gpt-4o-mini"
    client.generate_completion = AsyncMock(return_value="GDPR Data Processing Basics")
    return client


@pytest.fixture
def mock_tag_llm_client():
    """LLM client used by the tag suggestion endpoint."""
    client = AsyncMock()
    client.provider_name = "openai"
    client.model = "openai/gpt-4o-mini"
    client.generate_completion = AsyncMock(return_value='{"suggestions": []}')
    return client


@pytest.fixture
def test_settings():
    """Fully configured settings, isolated from any local .env file."""
    return Settings(
        _env_file=None,
        openai_api_key="test-openai-key",
        clerk_domain="test-clerk.clerk.accounts.dev",
        supabase_url="https://project.supabase.co",
    )


@pytest.fixture
def mock_user():
    """An authenticated Clerk user."""
    return AuthenticatedUser(
        clerk_id="user_test123",
        session_id="sess_test123",
        email="test@example.com",
        first_name="Test",
        last_name="User",
    )


def _create_test_client(
    mock_title_llm_client,
    mock_tag_llm_client,
    test_settings,
    *,
    mock_user=None,
):
    """Build a TestClient with LLM clients and settings overridden.

    When mock_user is provided, Clerk verification is bypassed. When omitted,
    the auth dependency runs normally so tests can assert 401 behaviour.
    """
    from policy_assistant.main import app
    from policy_assistant.config import get_settings
    from policy_assistant.dependencies import get_current_user_required
    from policy_assistant.factories.client_factories import (
        get_tag_llm_client,
        get_title_llm_client,
    )

    app.dependency_overrides[get_title_llm_client] = lambda: mock_title_llm_client
    app.dependency_overrides[get_tag_llm_client] = lambda: mock_tag_llm_client
    app.dependency_overrides[get_settings] = lambda: test_settings

    if mock_user is not None:
        app.dependency_overrides[get_current_user_required] = lambda: mock_user

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def client(mock_title_llm_client, mock_tag_llm_client, test_settings, mock_user):
    """Create TestClient with all dependencies overridden including auth."""
    yield from _create_test_client(
        mock_title_llm_client,
        mock_tag_llm_client,
        test_settings,
        mock_user=mock_user,
    )


@pytest.fixture
def unauthenticated_client(mock_title_llm_client, mock_tag_llm_client, test_settings):
    """Create TestClient WITHOUT auth override to test 401 responses."""
    yield from _create_test_client(
        mock_title_llm_client,
        mock_tag_llm_client,
        test_settings,
    )


@pytest.fixture
def transcript():
    """Request-shaped transcript with one user and one assistant turn."""
    return [
        {"role": "user", "content": "What are the GDPR requirements for data processing?"},
        {"role": "assistant", "content": "GDPR requires a lawful basis for processing personal data."},
    ]
