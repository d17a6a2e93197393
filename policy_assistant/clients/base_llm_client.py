"""Abstract base class for LLM providers."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional
from openai.types.chat import ChatCompletionMessageParam


class BaseLLMClient(ABC):
    """Abstract base class for LLM providers."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return provider name (e.g., 'openai', 'anthropic')."""
        pass

    @property
    @abstractmethod
    def model(self) -> str:
        """Return current model name."""
        pass

    @abstractmethod
    async def generate_completion(
        self,
        messages: List[ChatCompletionMessageParam],
        model: Optional[str] = None,
        temperature: float = 0.3,
        max_tokens: int = 1000,
        timeout: Optional[float] = None,
        response_format: Optional[dict[str, Any]] = None,
    ) -> str:
        """
        Generate completion from LLM.

        Args:
            messages: List of chat completion messages
            model: Model to use (overrides default)
            temperature: Sampling temperature (0-1)
            max_tokens: Maximum tokens to generate
            timeout: Optional timeout in seconds (uses client default if None)
            response_format: Optional response format directive, e.g. an
                OpenAI-style ``{"type": "json_schema", "json_schema": {...}}``
                dict. The raw text is returned either way; callers parse and
                validate it.

        Returns:
            Completion text ("" when the provider returned no content)
        """
        pass
