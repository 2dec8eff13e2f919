"""Configuration helpers for provider selection."""

from .resolver import (
    DEFAULT_MODEL_CONFIG,
    ConfigLayers,
    ModelConfig,
    SiteMetadata,
    resolve_credential,
    resolve_model_config,
    resolve_site_metadata,
)

__all__ = [
    "DEFAULT_MODEL_CONFIG",
    "ConfigLayers",
    "ModelConfig",
    "SiteMetadata",
    "resolve_credential",
    "resolve_model_config",
    "resolve_site_metadata",
]
