"""Factory for constructing provider-specific chat completion clients.

Both providers are reached through the ``openai`` client library:

- the primary provider is the OpenRouter gateway, authenticated with the
  ``ANTHROPIC_API_KEY`` credential and identified by two site headers;
- the secondary provider is Perplexity, used for research requests. Its
  client library is loaded on demand, so construction is asynchronous.

Constructed clients are checked against ``SupportsChatCompletions`` before
being handed out. Clients are never cached or pooled.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import asyncio
import importlib
import logging
from typing import Any, Protocol, runtime_checkable

from ai_providers.config.resolver import (
    DEFAULT_SITE_NAME,
    DEFAULT_SITE_URL,
    PRIMARY_KEY_ENV,
    SECONDARY_KEY_ENV,
    SiteMetadata,
)
from ai_providers.errors import ClientInitializationError, MissingCredentialError

logger = logging.getLogger(__name__)

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
PERPLEXITY_BASE_URL = "https://api.perplexity.ai"

REFERER_HEADER = "HTTP-Referer"
TITLE_HEADER = "X-Title"


class ProviderType(str, Enum):
    """Provider variants known to the selector."""

    PRIMARY = "primary"
    SECONDARY = "secondary"


def _no_headers() -> dict[str, str]:
    return {}


@dataclass(frozen=True, slots=True)
class ProviderDescriptor:
    """Static description of a provider endpoint."""

    provider_type: ProviderType
    name: str
    base_url: str
    credential_env: str
    headers: dict[str, str] = field(default_factory=_no_headers)


PROVIDERS: dict[ProviderType, ProviderDescriptor] = {
    ProviderType.PRIMARY: ProviderDescriptor(
        provider_type=ProviderType.PRIMARY,
        name="OpenRouter",
        base_url=OPENROUTER_BASE_URL,
        credential_env=PRIMARY_KEY_ENV,
    ),
    ProviderType.SECONDARY: ProviderDescriptor(
        provider_type=ProviderType.SECONDARY,
        name="Perplexity",
        base_url=PERPLEXITY_BASE_URL,
        credential_env=SECONDARY_KEY_ENV,
    ),
}


def describe_provider(
    provider_type: ProviderType,
    site: SiteMetadata | None = None,
) -> ProviderDescriptor:
    """Return a fresh descriptor for a provider.

    The primary provider gets site headers; empty site fields fall back to
    the built-in defaults.
    """
    descriptor = PROVIDERS[provider_type]
    headers = dict(descriptor.headers)
    if provider_type is ProviderType.PRIMARY:
        site = site or SiteMetadata()
        headers = {
            REFERER_HEADER: site.site_url or DEFAULT_SITE_URL,
            TITLE_HEADER: site.site_name or DEFAULT_SITE_NAME,
        }
    return ProviderDescriptor(
        provider_type=descriptor.provider_type,
        name=descriptor.name,
        base_url=descriptor.base_url,
        credential_env=descriptor.credential_env,
        headers=headers,
    )


class SupportsLogging(Protocol):
    """Minimal logger interface accepted by the factory and selector."""

    def debug(self, msg: str, *args: Any) -> None:
        """Log a debug message."""
        ...

    def info(self, msg: str, *args: Any) -> None:
        """Log an informational message."""
        ...

    def warning(self, msg: str, *args: Any) -> None:
        """Log a warning."""
        ...

    def error(self, msg: str, *args: Any) -> None:
        """Log an error."""
        ...


@runtime_checkable
class SupportsCreate(Protocol):
    """A completions resource exposing ``create``."""

    def create(self, *args: Any, **kwargs: Any) -> Any:
        """Issue a chat completion request."""
        ...


@runtime_checkable
class SupportsCompletions(Protocol):
    """A chat resource exposing ``completions``."""

    completions: Any


@runtime_checkable
class SupportsChatCompletions(Protocol):
    """The minimal client contract: ``client.chat.completions.create``."""

    chat: Any


def has_chat_completions(client: object) -> bool:
    """Return whether ``client`` satisfies the chat completions contract."""
    if not isinstance(client, SupportsChatCompletions):
        return False
    chat = client.chat
    if not isinstance(chat, SupportsCompletions):
        return False
    return isinstance(chat.completions, SupportsCreate)


def _load_client_class(module_name: str, class_name: str) -> Any:
    """Import ``module_name`` and return its ``class_name`` attribute."""
    try:
        module = importlib.import_module(module_name)
        return getattr(module, class_name)
    except (ImportError, AttributeError) as exc:
        msg = f"{class_name} could not be loaded from {module_name}: {exc}"
        raise ClientInitializationError(msg) from exc


def _instantiate(
    client_class: Any,
    descriptor: ProviderDescriptor,
    api_key: str,
) -> Any:
    kwargs: dict[str, Any] = {"api_key": api_key, "base_url": descriptor.base_url}
    if descriptor.headers:
        kwargs["default_headers"] = dict(descriptor.headers)
    try:
        client = client_class(**kwargs)
    except Exception as exc:
        msg = f"{descriptor.name} client could not be created: {exc}"
        raise ClientInitializationError(msg) from exc

    if not has_chat_completions(client):
        msg = f"{descriptor.name} client was not properly initialized"
        raise ClientInitializationError(msg)
    return client


def build_primary_client(
    api_key: str | None,
    site: SiteMetadata | None = None,
    *,
    log: SupportsLogging | None = None,
    client_class: Any | None = None,
) -> Any:
    """Create a client for the OpenRouter gateway.

    Args:
        api_key: The resolved primary credential.
        site: Site identity for the ``HTTP-Referer``/``X-Title`` headers.
            Defaults are used when omitted.
        log: Logger to report progress to. Defaults to the module logger.
        client_class: Client constructor; ``openai.OpenAI`` when omitted.

    Returns:
        A client exposing ``chat.completions.create``.

    Raises:
        MissingCredentialError: If ``api_key`` is empty or missing.
        ClientInitializationError: If the client cannot be created or does
            not expose the chat completions capability.

    """
    log = log or logger
    try:
        if not api_key:
            raise MissingCredentialError(PRIMARY_KEY_ENV)

        descriptor = describe_provider(ProviderType.PRIMARY, site)
        log.info(
            "Initializing %s client with %s (length: %d)",
            descriptor.name,
            PRIMARY_KEY_ENV,
            len(api_key),
        )
        log.debug(
            "%s client configuration: base_url=%s, site_url=%s, site_name=%s",
            descriptor.name,
            descriptor.base_url,
            descriptor.headers[REFERER_HEADER],
            descriptor.headers[TITLE_HEADER],
        )

        if client_class is None:
            client_class = _load_client_class("openai", "OpenAI")
        client = _instantiate(client_class, descriptor, api_key)
    except (MissingCredentialError, ClientInitializationError) as exc:
        log.error("Failed to initialize OpenRouter client: %s", exc)
        raise

    log.info("%s client successfully initialized", descriptor.name)
    return client


async def build_secondary_client(
    api_key: str | None,
    *,
    log: SupportsLogging | None = None,
    client_module: str = "openai",
    client_class_name: str = "OpenAI",
) -> Any:
    """Create a client for the Perplexity API.

    The client library is imported when the client is first needed, since
    the secondary provider is only used for research requests.

    Raises:
        MissingCredentialError: If ``api_key`` is empty or missing.
        ClientInitializationError: If the library cannot be loaded or the
            client cannot be created.

    """
    log = log or logger
    try:
        if not api_key:
            raise MissingCredentialError(SECONDARY_KEY_ENV)

        descriptor = describe_provider(ProviderType.SECONDARY)
        client_class = await asyncio.to_thread(
            _load_client_class,
            client_module,
            client_class_name,
        )
        return _instantiate(client_class, descriptor, api_key)
    except (MissingCredentialError, ClientInitializationError) as exc:
        log.error("Failed to initialize Perplexity client: %s", exc)
        raise
