"""FastAPI dependency injection providers."""

from typing import Annotated

from fastapi import Depends, Header

from policy_assistant.clients.base_llm_client import BaseLLMClient
from policy_assistant.config import Settings, get_settings
from policy_assistant.exceptions import MissingTokenError
from policy_assistant.factories.client_factories import (
    get_tag_llm_client,
    get_title_llm_client,
)
from policy_assistant.services.auth_service import AuthenticatedUser, get_auth_service

# Type aliases for cleaner router signatures
SettingsDep = Annotated[Settings, Depends(get_settings)]

# LLM clients (one per model, built lazily)
TitleLLMClientDep = Annotated[BaseLLMClient, Depends(get_title_llm_client)]
TagLLMClientDep = Annotated[BaseLLMClient, Depends(get_tag_llm_client)]


# ============================================================================
# Authentication Dependencies
# ============================================================================


async def get_current_user_required(
    authorization: Annotated[str | None, Header(alias="Authorization")] = None,
) -> AuthenticatedUser:
    """Verify the Clerk session token, raise 401 if missing or invalid."""
    if not authorization:
        raise MissingTokenError()

    return await get_auth_service().verify_token(authorization)


CurrentUserRequired = Annotated[AuthenticatedUser, Depends(get_current_user_required)]
