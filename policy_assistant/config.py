"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # LLM Configuration (LiteLLM-format model strings: "provider/model")
    default_llm_model: str = "openai/gpt-4o-mini"
    title_llm_model: str = ""
    tag_llm_model: str = ""
    allowed_llm_models: str = "openai/gpt-4o-mini,openai/gpt-4o"

    # Provider API Keys
    openai_api_key: str = ""

    # Request Lifecycle Configuration
    llm_call_timeout_seconds: int = 30

    # Clerk Authentication
    clerk_domain: str = ""

    # Supabase (conversation store lives client-side; reported by health only)
    supabase_url: str = ""

    # App
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: str = ""

    # Langfuse Observability (LiteLLM callbacks)
    langfuse_enabled: bool = False
    langfuse_public_key: Optional[str] = None
    langfuse_secret_key: Optional[str] = None
    langfuse_host: str = "https://cloud.langfuse.com"

    # Helper methods
    def get_allowed_models_list(self) -> List[str]:
        """Get list of all allowed LiteLLM model strings."""
        return [m.strip() for m in self.allowed_llm_models.split(",") if m.strip()]

    def is_model_allowed(self, model: str) -> bool:
        """Check if a LiteLLM model string is in the allowed list."""
        return model in self.get_allowed_models_list()

    def get_title_model(self) -> str:
        """Model used for conversation titles."""
        return self.title_llm_model or self.default_llm_model

    def get_tag_model(self) -> str:
        """Model used for tag suggestions."""
        return self.tag_llm_model or self.default_llm_model


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
