"""Tests for application startup wiring."""

import os
from unittest.mock import patch

import litellm

from policy_assistant.config import Settings
from policy_assistant.main import configure_litellm


class TestConfigureLitellm:
    """Tests for configure_litellm."""

    def test_langfuse_keys_exported_when_enabled(self):
        settings = Settings(
            _env_file=None,
            langfuse_enabled=True,
            langfuse_public_key="pk-lf-test",
            langfuse_secret_key="sk-lf-test",
            langfuse_host="https://langfuse.example.com",
        )

        with (
            patch.dict(os.environ, {}, clear=True),
            patch.object(litellm, "success_callback", []),
            patch.object(litellm, "failure_callback", []),
        ):
            configure_litellm(settings)

            assert os.environ["LANGFUSE_PUBLIC_KEY"] == "pk-lf-test"
            assert os.environ["LANGFUSE_SECRET_KEY"] == "sk-lf-test"
            assert os.environ["LANGFUSE_HOST"] == "https://langfuse.example.com"
            assert litellm.success_callback == ["langfuse"]
            assert litellm.failure_callback == ["langfuse"]

    def test_existing_environment_wins(self):
        settings = Settings(_env_file=None, langfuse_enabled=True, langfuse_public_key="pk-from-settings")

        with (
            patch.dict(os.environ, {"LANGFUSE_PUBLIC_KEY": "pk-from-env"}, clear=True),
            patch.object(litellm, "success_callback", []),
            patch.object(litellm, "failure_callback", []),
        ):
            configure_litellm(settings)

            assert os.environ["LANGFUSE_PUBLIC_KEY"] == "pk-from-env"

    def test_disabled_leaves_callbacks_alone(self):
        settings = Settings(_env_file=None, langfuse_enabled=False, langfuse_public_key="pk-lf-test")

        with (
            patch.dict(os.environ, {}, clear=True),
            patch.object(litellm, "success_callback", []),
        ):
            configure_litellm(settings)

            assert "LANGFUSE_PUBLIC_KEY" not in os.environ
            assert litellm.success_callback == []
