"""API routers."""

from policy_assistant.routers import health, tags, titles

__all__ = ["health", "tags", "titles"]
