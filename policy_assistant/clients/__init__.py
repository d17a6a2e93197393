"""External API clients."""

from policy_assistant.clients.base_llm_client import BaseLLMClient
from policy_assistant.clients.litellm_client import LiteLLMClient

__all__ = [
    "BaseLLMClient",
    "LiteLLMClient",
]
