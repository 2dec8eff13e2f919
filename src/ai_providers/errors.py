"""Domain errors raised while selecting and building provider clients."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - types only
    from collections.abc import Sequence

    from ai_providers.llm.selector import StepOutcome


NO_PROVIDER_MESSAGE = "No AI models available. Please check your API keys."


class ProviderSelectionError(RuntimeError):
    """Base class for provider selection failures."""


class MissingCredentialError(ProviderSelectionError):
    """Raised when a required API key is absent from every config layer."""

    def __init__(self, key_name: str) -> None:
        """Initialise the error for the missing credential variable."""
        self.key_name = key_name
        super().__init__(f"{key_name} not found in session environment or process environment")


class ClientInitializationError(ProviderSelectionError):
    """Raised when a provider client cannot be loaded or fails validation."""


class NoProviderAvailableError(ProviderSelectionError):
    """Raised when every selection step was skipped or failed."""

    def __init__(self, attempts: Sequence[StepOutcome] = ()) -> None:
        """Initialise the terminal error with the recorded step outcomes."""
        self.attempts = tuple(attempts)
        super().__init__(NO_PROVIDER_MESSAGE)
