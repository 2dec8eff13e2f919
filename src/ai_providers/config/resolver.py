"""Layered resolution of credentials, site identity and model parameters.

Every value is looked up in the session layer first, then in the process
layer, then taken from a supplied default. Both layers are plain mappings
passed in by the caller; nothing here reads ``os.environ``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:  # pragma: no cover - types only
    from ai_providers.utils.settings import ProviderSettings

PRIMARY_KEY_ENV = "ANTHROPIC_API_KEY"
SECONDARY_KEY_ENV = "PERPLEXITY_API_KEY"
SITE_URL_ENV = "YOUR_SITE_URL"
SITE_NAME_ENV = "YOUR_SITE_NAME"
MODEL_ENV = "MODEL"
MAX_TOKENS_ENV = "MAX_TOKENS"
TEMPERATURE_ENV = "TEMPERATURE"

DEFAULT_MODEL = "anthropic/claude-3.7-sonnet"
DEFAULT_MAX_TOKENS = 64000
DEFAULT_TEMPERATURE = 0.2

DEFAULT_SITE_URL = "https://task-master-ai.app"
DEFAULT_SITE_NAME = "Task Master AI"

_T = TypeVar("_T")


@dataclass(frozen=True, slots=True)
class ModelConfig:
    """Model identifier and sampling parameters for a request."""

    model: str
    max_tokens: int
    temperature: float


DEFAULT_MODEL_CONFIG = ModelConfig(
    model=DEFAULT_MODEL,
    max_tokens=DEFAULT_MAX_TOKENS,
    temperature=DEFAULT_TEMPERATURE,
)


@dataclass(frozen=True, slots=True)
class SiteMetadata:
    """Site identity reported to the gateway for analytics."""

    site_url: str = DEFAULT_SITE_URL
    site_name: str = DEFAULT_SITE_NAME


def _layer_values(
    session_env: Mapping[str, str] | None,
    process_env: Mapping[str, str] | None,
    key_name: str,
) -> list[str]:
    """Return the non-empty values for ``key_name`` in precedence order."""
    values: list[str] = []
    for layer in (session_env, process_env):
        if not layer:
            continue
        value = layer.get(key_name)
        if isinstance(value, str) and value:
            values.append(value)
    return values


def _first_parsed(
    candidates: list[str],
    parser: Callable[[str], _T],
    default: Any,
) -> Any:
    """Return the first candidate that parses, else ``default`` unchanged."""
    for candidate in candidates:
        try:
            return parser(candidate)
        except ValueError:
            continue
    return default


def resolve_credential(
    session_env: Mapping[str, str] | None,
    process_env: Mapping[str, str] | None,
    key_name: str,
) -> str | None:
    """Return the session value for ``key_name``, else the process value.

    Empty strings count as absent. Returns ``None`` when neither layer
    provides a value.
    """
    values = _layer_values(session_env, process_env, key_name)
    return values[0] if values else None


def resolve_model_config(
    session_env: Mapping[str, str] | None,
    process_env: Mapping[str, str] | None,
    defaults: ModelConfig = DEFAULT_MODEL_CONFIG,
) -> ModelConfig:
    """Resolve model parameters field by field.

    ``max_tokens`` and ``temperature`` are parsed as numbers. A value that
    does not parse is skipped in favour of the next layer, and the default
    is passed through as given. No range checks are applied.
    """
    models = _layer_values(session_env, process_env, MODEL_ENV)
    return ModelConfig(
        model=models[0] if models else defaults.model,
        max_tokens=_first_parsed(
            _layer_values(session_env, process_env, MAX_TOKENS_ENV),
            int,
            defaults.max_tokens,
        ),
        temperature=_first_parsed(
            _layer_values(session_env, process_env, TEMPERATURE_ENV),
            float,
            defaults.temperature,
        ),
    )


def resolve_site_metadata(
    session_env: Mapping[str, str] | None,
    process_env: Mapping[str, str] | None,
) -> SiteMetadata:
    """Resolve the site identity, falling back to the built-in defaults."""
    return SiteMetadata(
        site_url=resolve_credential(session_env, process_env, SITE_URL_ENV)
        or DEFAULT_SITE_URL,
        site_name=resolve_credential(session_env, process_env, SITE_NAME_ENV)
        or DEFAULT_SITE_NAME,
    )


def _empty_layer() -> dict[str, str]:
    return {}


@dataclass(frozen=True, slots=True)
class ConfigLayers:
    """The two configuration layers consulted by every entry point."""

    session: Mapping[str, str] = field(default_factory=_empty_layer)
    process: Mapping[str, str] = field(default_factory=_empty_layer)

    @classmethod
    def from_environment(
        cls,
        session_env: Mapping[str, str] | None = None,
        settings: ProviderSettings | None = None,
    ) -> ConfigLayers:
        """Build layers whose process side comes from ``ProviderSettings``."""
        if settings is None:
            from ai_providers.utils.settings import ProviderSettings

            settings = ProviderSettings()
        return cls(session=dict(session_env or {}), process=settings.as_environ())

    def credential(self, key_name: str) -> str | None:
        """Resolve a credential across both layers."""
        return resolve_credential(self.session, self.process, key_name)

    def model_config(self, defaults: ModelConfig = DEFAULT_MODEL_CONFIG) -> ModelConfig:
        """Resolve the model configuration across both layers."""
        return resolve_model_config(self.session, self.process, defaults)

    def site_metadata(self) -> SiteMetadata:
        """Resolve the site identity across both layers."""
        return resolve_site_metadata(self.session, self.process)
