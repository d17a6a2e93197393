"""Factory functions for external API clients."""

from functools import lru_cache

from policy_assistant.config import Settings, get_settings
from policy_assistant.clients.base_llm_client import BaseLLMClient
from policy_assistant.clients.litellm_client import LiteLLMClient
from policy_assistant.exceptions import InvalidModelError


def _validate_model(model: str, settings: Settings) -> None:
    """Raise InvalidModelError if model is not in the allowed list."""
    if not settings.is_model_allowed(model):
        allowed = settings.get_allowed_models_list()
        provider = model.split("/", 1)[0] if "/" in model else "unknown"
        raise InvalidModelError(model=model, provider=provider, valid_models=allowed)


@lru_cache(maxsize=8)
def _cached_client(model: str, timeout: float, api_key: str | None = None) -> LiteLLMClient:
    return LiteLLMClient(model=model, timeout=timeout, api_key=api_key)


def _api_key_for(model: str, settings: Settings) -> str | None:
    """Configured key for the model's provider, if settings hold one."""
    provider = model.split("/", 1)[0] if "/" in model else "openai"
    if provider == "openai":
        return settings.openai_api_key or None
    return None


def get_llm_client(model: str | None = None) -> BaseLLMClient:
    """
    Create LLM client for specified LiteLLM model.

    Args:
        model: LiteLLM-format model string (e.g. "openai/gpt-4o-mini").
               Uses default_llm_model from settings if None.

    Returns:
        BaseLLMClient instance (one per model/timeout pair)

    Raises:
        InvalidModelError: If model is not in the allowed list
    """
    settings = get_settings()

    if model is None:
        model = settings.default_llm_model

    _validate_model(model, settings)

    return _cached_client(
        model,
        float(settings.llm_call_timeout_seconds),
        _api_key_for(model, settings),
    )


def get_title_llm_client() -> BaseLLMClient:
    """LLM client for conversation titles."""
    return get_llm_client(get_settings().get_title_model())


def get_tag_llm_client() -> BaseLLMClient:
    """LLM client for tag suggestions."""
    return get_llm_client(get_settings().get_tag_model())
