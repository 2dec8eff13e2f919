"""LLM provider selection exports.

This package exposes the client factory, the fallback selector and the
error translator.
"""

from .agno_models import create_agno_model
from .factory import (
    ProviderType,
    build_primary_client,
    build_secondary_client,
    describe_provider,
)
from .selector import SelectionOptions, SelectionResult, select_model
from .translator import translate_error

__all__ = [
    "ProviderType",
    "SelectionOptions",
    "SelectionResult",
    "build_primary_client",
    "build_secondary_client",
    "create_agno_model",
    "describe_provider",
    "select_model",
    "translate_error",
]
