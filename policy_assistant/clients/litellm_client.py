"""LiteLLM-based LLM client with unified multi-provider support.

Routes to any LiteLLM-supported provider via model prefix (e.g. openai/gpt-4o-mini,
anthropic/claude-3-5-haiku-latest). Langfuse tracing is handled via LiteLLM's
global callback system configured at startup in main.py.
"""

import asyncio
import json
from contextlib import asynccontextmanager
from typing import Any

import litellm
from openai.types.chat import ChatCompletionMessageParam

from policy_assistant.clients.base_llm_client import BaseLLMClient
from policy_assistant.exceptions import LLMTimeoutError
from policy_assistant.utils.logger import get_logger, truncate

log = get_logger(__name__)

# Providers that accept a json_schema response_format (schema-constrained decoding).
# All others fall back to JSON mode with the schema spelled out in the system prompt.
NATIVE_JSON_SCHEMA_PROVIDERS: frozenset[str] = frozenset({"openai", "anthropic", "gemini"})


def _provider_from_model(model: str) -> str:
    """Extract provider prefix from a LiteLLM model string."""
    return model.split("/", 1)[0] if "/" in model else "openai"


def _inject_schema(
    messages: list[ChatCompletionMessageParam],
    schema: dict[str, Any],
) -> list[dict[str, Any]]:
    """Append JSON schema instructions to the system message for prompt-based structured output."""
    rendered = json.dumps(schema, indent=2)
    suffix = (
        "\n\nRespond with a single valid JSON object matching this exact schema:\n"
        f"{rendered}\n"
        "Output ONLY the JSON object. No markdown fences, no explanation."
    )
    patched: list[dict[str, Any]] = []
    injected = False
    for msg in messages:
        if msg.get("role") == "system" and not injected:  # type: ignore[union-attr]
            content = msg["content"]  # type: ignore[index]
            if not isinstance(content, str):
                raise TypeError(
                    f"Schema injection requires string system message, got {type(content)}"
                )
            patched.append({**msg, "content": content + suffix})
            injected = True
        else:
            patched.append(dict(msg))  # type: ignore[arg-type]
    if not injected:
        patched.insert(0, {"role": "system", "content": suffix.lstrip()})
    return patched


class LiteLLMClient(BaseLLMClient):
    """Unified LLM client backed by LiteLLM.

    Supports any provider that LiteLLM handles via model prefix routing.
    """

    def __init__(
        self,
        model: str = "openai/gpt-4o-mini",
        timeout: float = 30.0,
        api_key: str | None = None,
    ):
        self._model = model
        self.default_timeout = timeout
        # Only sent to models of this client's provider; others use LiteLLM env vars
        self._api_key = api_key

    @property
    def provider_name(self) -> str:
        return _provider_from_model(self._model)

    @property
    def model(self) -> str:
        return self._model

    @asynccontextmanager
    async def _timeout(self, seconds: float):
        try:
            async with asyncio.timeout(seconds):
                yield
        except asyncio.TimeoutError:
            raise LLMTimeoutError(provider=self.provider_name, timeout_seconds=seconds)

    def _prepare_response_format(
        self,
        model: str,
        messages: list[ChatCompletionMessageParam],
        response_format: dict[str, Any] | None,
    ) -> tuple[list[Any], dict[str, Any] | None]:
        """Downgrade json_schema requests to JSON mode for providers without native support."""
        if not response_format or response_format.get("type") != "json_schema":
            return list(messages), response_format

        if _provider_from_model(model) in NATIVE_JSON_SCHEMA_PROVIDERS:
            return list(messages), response_format

        schema = response_format.get("json_schema", {}).get("schema", {})
        return _inject_schema(messages, schema), {"type": "json_object"}

    async def generate_completion(
        self,
        messages: list[ChatCompletionMessageParam],
        model: str | None = None,
        temperature: float = 0.3,
        max_tokens: int = 1000,
        timeout: float | None = None,
        response_format: dict[str, Any] | None = None,
    ) -> str:
        model_to_use = model or self._model
        effective_timeout = timeout if timeout is not None else self.default_timeout
        call_messages, call_format = self._prepare_response_format(
            model_to_use, messages, response_format
        )

        log.debug(
            "litellm request",
            model=model_to_use,
            messages=len(call_messages),
            temperature=temperature,
            max_tokens=max_tokens,
            response_format=call_format.get("type") if call_format else None,
            timeout=effective_timeout,
        )

        call_kwargs: dict[str, Any] = {
            "model": model_to_use,
            "messages": call_messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if call_format:
            call_kwargs["response_format"] = call_format
        if self._api_key and _provider_from_model(model_to_use) == self.provider_name:
            call_kwargs["api_key"] = self._api_key

        async with self._timeout(effective_timeout):
            response = await litellm.acompletion(**call_kwargs)

        content = response.choices[0].message.content or ""  # type: ignore[union-attr]
        usage = getattr(response, "usage", None)

        log.debug(
            "litellm response",
            model=model_to_use,
            content=truncate(content, 2000),
            prompt_tokens=usage.prompt_tokens if usage else None,
            completion_tokens=usage.completion_tokens if usage else None,
            total_tokens=usage.total_tokens if usage else None,
        )

        return content
