"""Provider selection, client construction and error translation for AI model APIs."""

from .config import ConfigLayers, ModelConfig, resolve_credential, resolve_model_config
from .errors import (
    ClientInitializationError,
    MissingCredentialError,
    NoProviderAvailableError,
    ProviderSelectionError,
)
from .llm import (
    ProviderType,
    SelectionOptions,
    SelectionResult,
    build_primary_client,
    build_secondary_client,
    select_model,
    translate_error,
)

__all__ = [
    "ClientInitializationError",
    "ConfigLayers",
    "MissingCredentialError",
    "ModelConfig",
    "NoProviderAvailableError",
    "ProviderSelectionError",
    "ProviderType",
    "SelectionOptions",
    "SelectionResult",
    "build_primary_client",
    "build_secondary_client",
    "resolve_credential",
    "resolve_model_config",
    "select_model",
    "translate_error",
]
