"""Ordered provider selection with fallback.

Selection walks ``SELECTION_STEPS`` in order. Each step declares when it
applies and how to build a result; the first step that succeeds wins.
Credential and initialization failures inside a step are logged, recorded
and skipped. When no step produces a result, ``NoProviderAvailableError``
is raised with the recorded outcomes attached.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
import logging
from typing import Any

from ai_providers.config.resolver import (
    PRIMARY_KEY_ENV,
    SECONDARY_KEY_ENV,
    ConfigLayers,
)
from ai_providers.errors import (
    ClientInitializationError,
    MissingCredentialError,
    NoProviderAvailableError,
)

from .factory import (
    ProviderType,
    SupportsLogging,
    build_primary_client,
    build_secondary_client,
)

logger = logging.getLogger(__name__)

DEFAULT_PRIMARY_MODEL = "anthropic/claude-3.7-sonnet"
# Research requests currently map to the same gateway model as the default.
RESEARCH_PRIMARY_MODEL = "anthropic/claude-3.7-sonnet"
OVERLOAD_FALLBACK_MODEL = "openai/gpt-4o"


@dataclass(frozen=True, slots=True)
class SelectionOptions:
    """Caller-supplied hints for a single selection."""

    requires_research: bool = False
    primary_overloaded: bool = False


@dataclass(frozen=True, slots=True)
class SelectionResult:
    """The provider, client and model chosen for one request."""

    provider_type: ProviderType
    client: Any
    model_name: str | None = None


@dataclass(frozen=True, slots=True)
class StepOutcome:
    """Record of a step that applied but did not produce a result."""

    step: str
    error: Exception


StepPredicate = Callable[[ConfigLayers, SelectionOptions], bool]
StepAttempt = Callable[
    [ConfigLayers, SelectionOptions, SupportsLogging],
    Awaitable[SelectionResult],
]


@dataclass(frozen=True, slots=True)
class SelectionStep:
    """One entry of the fallback chain."""

    name: str
    applies: StepPredicate
    attempt: StepAttempt
    failure_level: int = logging.ERROR


def choose_primary_model(
    options: SelectionOptions,
    log: SupportsLogging | None = None,
) -> str:
    """Return the gateway model name for the given options."""
    model_name = DEFAULT_PRIMARY_MODEL
    if options.requires_research:
        model_name = RESEARCH_PRIMARY_MODEL
    if options.primary_overloaded:
        (log or logger).warning(
            "Primary model appears to be overloaded, using alternative model %s",
            OVERLOAD_FALLBACK_MODEL,
        )
        model_name = OVERLOAD_FALLBACK_MODEL
    return model_name


def _primary_applies(layers: ConfigLayers, options: SelectionOptions) -> bool:
    _ = options
    return layers.credential(PRIMARY_KEY_ENV) is not None


async def _attempt_primary(
    layers: ConfigLayers,
    options: SelectionOptions,
    log: SupportsLogging,
) -> SelectionResult:
    client = build_primary_client(
        layers.credential(PRIMARY_KEY_ENV),
        layers.site_metadata(),
        log=log,
    )
    return SelectionResult(
        provider_type=ProviderType.PRIMARY,
        client=client,
        model_name=choose_primary_model(options, log),
    )


def _secondary_applies(layers: ConfigLayers, options: SelectionOptions) -> bool:
    return options.requires_research and layers.credential(SECONDARY_KEY_ENV) is not None


async def _attempt_secondary(
    layers: ConfigLayers,
    options: SelectionOptions,
    log: SupportsLogging,
) -> SelectionResult:
    _ = options
    client = await build_secondary_client(layers.credential(SECONDARY_KEY_ENV), log=log)
    return SelectionResult(provider_type=ProviderType.SECONDARY, client=client)


SELECTION_STEPS: tuple[SelectionStep, ...] = (
    SelectionStep(
        name="OpenRouter",
        applies=_primary_applies,
        attempt=_attempt_primary,
        failure_level=logging.ERROR,
    ),
    SelectionStep(
        name="Perplexity",
        applies=_secondary_applies,
        attempt=_attempt_secondary,
        failure_level=logging.WARNING,
    ),
)


async def _run_step(
    step: SelectionStep,
    layers: ConfigLayers,
    options: SelectionOptions,
    log: SupportsLogging,
) -> SelectionResult | StepOutcome:
    """Run one step, turning recoverable failures into a ``StepOutcome``."""
    try:
        return await step.attempt(layers, options, log)
    except (MissingCredentialError, ClientInitializationError) as exc:
        report = log.error if step.failure_level >= logging.ERROR else log.warning
        report("%s not available: %s", step.name, exc)
        return StepOutcome(step=step.name, error=exc)


async def select_model(
    layers: ConfigLayers,
    options: SelectionOptions | None = None,
    *,
    log: SupportsLogging | None = None,
    steps: Sequence[SelectionStep] = SELECTION_STEPS,
) -> SelectionResult:
    """Return the best available provider client for a request.

    Args:
        layers: Session and process configuration to resolve keys from.
        options: Research and overload hints. Defaults to neither.
        log: Logger to report to. Defaults to the module logger.
        steps: The fallback chain, in priority order.

    Returns:
        The first successful ``SelectionResult``.

    Raises:
        NoProviderAvailableError: If no step applied or every applicable
            step failed.

    """
    options = options or SelectionOptions()
    log = log or logger

    attempts: list[StepOutcome] = []
    for step in steps:
        if not step.applies(layers, options):
            continue
        outcome = await _run_step(step, layers, options, log)
        if isinstance(outcome, SelectionResult):
            return outcome
        attempts.append(outcome)

    raise NoProviderAvailableError(attempts)
