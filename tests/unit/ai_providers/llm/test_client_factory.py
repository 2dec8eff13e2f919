"""Tests for provider client construction."""

from __future__ import annotations

import logging
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import openai
import pytest

from ai_providers.config.resolver import SiteMetadata
from ai_providers.errors import ClientInitializationError, MissingCredentialError
from ai_providers.llm.factory import (
    OPENROUTER_BASE_URL,
    PERPLEXITY_BASE_URL,
    ProviderType,
    build_primary_client,
    build_secondary_client,
    describe_provider,
    has_chat_completions,
)


class TestBuildPrimaryClient:
    """Primary (OpenRouter) client construction."""

    def test_builds_openai_client_for_gateway(self) -> None:
        """The default client class should be the OpenAI SDK client."""
        client = build_primary_client("sk-or-test")

        assert isinstance(client, openai.OpenAI)
        assert has_chat_completions(client)
        assert str(client.base_url).startswith(OPENROUTER_BASE_URL)
        assert client.default_headers["HTTP-Referer"] == "https://task-master-ai.app"
        assert client.default_headers["X-Title"] == "Task Master AI"

    def test_passes_site_headers(self, fake_client_class: type[Any]) -> None:
        """Site metadata should become the identification headers."""
        site = SiteMetadata(site_url="https://example.com", site_name="Example")
        client = build_primary_client(
            "sk-or-test",
            site,
            client_class=fake_client_class,
        )

        assert client.kwargs == {
            "api_key": "sk-or-test",
            "base_url": OPENROUTER_BASE_URL,
            "default_headers": {
                "HTTP-Referer": "https://example.com",
                "X-Title": "Example",
            },
        }

    def test_empty_site_fields_use_default_headers(
        self,
        fake_client_class: type[Any],
    ) -> None:
        """Empty site fields should fall back to the built-in identity."""
        client = build_primary_client(
            "sk-or-test",
            SiteMetadata(site_url="", site_name=""),
            client_class=fake_client_class,
        )

        assert client.kwargs["default_headers"] == {
            "HTTP-Referer": "https://task-master-ai.app",
            "X-Title": "Task Master AI",
        }

    @pytest.mark.parametrize("api_key", [None, ""])
    def test_requires_credential(self, api_key: str | None) -> None:
        """Missing keys should raise MissingCredentialError."""
        with pytest.raises(MissingCredentialError, match="ANTHROPIC_API_KEY"):
            build_primary_client(api_key)

    def test_rejects_client_without_chat_completions(
        self,
        shapeless_client_class: type[Any],
    ) -> None:
        """Clients failing the capability check should be rejected."""
        with pytest.raises(ClientInitializationError, match="not properly initialized"):
            build_primary_client("sk-or-test", client_class=shapeless_client_class)

    def test_wraps_constructor_failures(self) -> None:
        """Exceptions from the client constructor should be wrapped."""
        broken = MagicMock(side_effect=TypeError("unexpected keyword"))

        with pytest.raises(ClientInitializationError, match="unexpected keyword"):
            build_primary_client("sk-or-test", client_class=broken)

    def test_logs_key_length_not_key(
        self,
        fake_client_class: type[Any],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Logging should report the key length and never the key."""
        with caplog.at_level(logging.DEBUG, logger="ai_providers.llm.factory"):
            build_primary_client("sk-or-secret-value", client_class=fake_client_class)

        assert "length: 18" in caplog.text
        assert "sk-or-secret-value" not in caplog.text
        assert OPENROUTER_BASE_URL in caplog.text

    def test_uses_injected_logger(self) -> None:
        """Failures should be reported through the supplied logger."""
        log = MagicMock()

        with pytest.raises(MissingCredentialError):
            build_primary_client(None, log=log)

        log.error.assert_called_once()
        assert "Failed to initialize OpenRouter client" in log.error.call_args[0][0]


class TestBuildSecondaryClient:
    """Secondary (Perplexity) client construction."""

    @pytest.mark.asyncio
    async def test_builds_perplexity_client(self) -> None:
        """The client library should be loaded and bound to Perplexity."""
        client = await build_secondary_client("pplx-test")

        assert isinstance(client, openai.OpenAI)
        assert str(client.base_url).startswith(PERPLEXITY_BASE_URL)
        assert "X-Title" not in client.default_headers

    @pytest.mark.asyncio
    @pytest.mark.parametrize("api_key", [None, ""])
    async def test_requires_credential(self, api_key: str | None) -> None:
        """Missing keys should raise MissingCredentialError."""
        with pytest.raises(MissingCredentialError, match="PERPLEXITY_API_KEY"):
            await build_secondary_client(api_key)

    @pytest.mark.asyncio
    async def test_missing_library_raises_initialization_error(self) -> None:
        """An unloadable client library should raise ClientInitializationError."""
        with pytest.raises(ClientInitializationError, match="could not be loaded"):
            await build_secondary_client(
                "pplx-test",
                client_module="ai_providers_missing_client_library",
            )

    @pytest.mark.asyncio
    async def test_missing_class_raises_initialization_error(self) -> None:
        """A library without the client class should be rejected."""
        with pytest.raises(ClientInitializationError):
            await build_secondary_client(
                "pplx-test",
                client_module="json",
                client_class_name="NoSuchClient",
            )


def test_describe_provider_headers_only_for_primary() -> None:
    """Only the primary provider carries identification headers."""
    primary = describe_provider(ProviderType.PRIMARY)
    secondary = describe_provider(ProviderType.SECONDARY)

    assert set(primary.headers) == {"HTTP-Referer", "X-Title"}
    assert secondary.headers == {}
    assert secondary.base_url == PERPLEXITY_BASE_URL


def test_capability_check_rejects_plain_objects() -> None:
    """Objects without the chat attribute fail the capability check."""
    assert not has_chat_completions(object())


def test_describe_provider_returns_independent_headers() -> None:
    """Mutating a returned descriptor must not leak into later builds."""
    describe_provider(ProviderType.SECONDARY).headers["X-Leak"] = "1"
    describe_provider(ProviderType.PRIMARY).headers["X-Title"] = "changed"

    assert describe_provider(ProviderType.SECONDARY).headers == {}
    assert describe_provider(ProviderType.PRIMARY).headers["X-Title"] == "Task Master AI"


@pytest.mark.asyncio
async def test_secondary_library_loaded_off_the_event_loop(
    fake_client_class: type[Any],
) -> None:
    """The deferred library load should run in a worker thread."""
    with patch(
        "ai_providers.llm.factory.asyncio.to_thread",
        new=AsyncMock(return_value=fake_client_class),
    ) as mock_to_thread:
        client = await build_secondary_client("pplx-test")

    mock_to_thread.assert_awaited_once()
    assert mock_to_thread.await_args.args[1:] == ("openai", "OpenAI")
    assert client.kwargs["base_url"] == PERPLEXITY_BASE_URL
