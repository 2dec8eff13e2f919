"""Build agno model instances from a provider selection.

Host applications that run agno agents can turn a ``SelectionResult`` into
a model object without rebuilding the client: the selected client is handed
to the agno integration as-is.

Integrations are imported lazily so that the selector works without agno's
optional provider modules installed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ai_providers.config.resolver import DEFAULT_MODEL_CONFIG, ModelConfig
from ai_providers.errors import ClientInitializationError

from .factory import ProviderType

if TYPE_CHECKING:  # pragma: no cover - types only
    from .selector import SelectionResult

logger = logging.getLogger(__name__)

_INTEGRATIONS: dict[ProviderType, tuple[tuple[str, str], ...]] = {
    ProviderType.PRIMARY: (
        ("agno.models.openrouter", "OpenRouter"),
        ("agno.models.openrouter.openrouter", "OpenRouter"),
    ),
    ProviderType.SECONDARY: (
        ("agno.models.perplexity", "Perplexity"),
        ("agno.models.perplexity.perplexity", "Perplexity"),
    ),
}


def _load_model_class(provider_type: ProviderType) -> Any:
    """Import the agno model class for ``provider_type``."""
    for path, class_name in _INTEGRATIONS[provider_type]:
        try:
            module = __import__(path, fromlist=[class_name])
            return getattr(module, class_name)
        except (ImportError, AttributeError) as exc:
            logger.debug("%s import failed from %s: %s", class_name, path, exc)
            continue

    msg = (
        f"agno integration for the {provider_type.value} provider is not available. "
        "Install a version of agno that provides it."
    )
    raise ClientInitializationError(msg)


def create_agno_model(
    selection: SelectionResult,
    config: ModelConfig | None = None,
    *,
    research_model: str | None = None,
) -> Any:
    """Create an agno model bound to the selected provider client.

    Args:
        selection: The result of ``select_model``.
        config: Sampling parameters. Only ``max_tokens`` and ``temperature``
            are used; the model id comes from the selection.
        research_model: Model id for the secondary provider. The agno
            default is kept when omitted.

    Returns:
        A model instance compatible with ``agno.agent.Agent``.

    Raises:
        ClientInitializationError: If the agno integration is unavailable.

    """
    config = config or DEFAULT_MODEL_CONFIG
    model_class = _load_model_class(selection.provider_type)

    kwargs: dict[str, Any] = {
        "client": selection.client,
        "max_tokens": config.max_tokens,
        "temperature": config.temperature,
    }
    if selection.provider_type is ProviderType.PRIMARY and selection.model_name:
        kwargs["id"] = selection.model_name
    elif research_model:
        kwargs["id"] = research_model
    return model_class(**kwargs)
