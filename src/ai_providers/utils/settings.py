"""Application settings management using Pydantic Settings.

This module provides the process-wide configuration layer for provider
selection and the logging configuration, both read from environment
variables and an optional ``.env`` file.
"""

from typing import Any, ClassVar, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ai_providers.config.resolver import (
    MAX_TOKENS_ENV,
    MODEL_ENV,
    PRIMARY_KEY_ENV,
    SECONDARY_KEY_ENV,
    SITE_NAME_ENV,
    SITE_URL_ENV,
    TEMPERATURE_ENV,
)


class LoggingSettings(BaseSettings):
    """Logging configuration settings.

    All settings can be configured via environment variables.
    """

    instance: ClassVar[Any] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    log_format: Literal["json", "plain"] = Field(
        default="plain",
        description="Log output format",
    )

    log_file_path: str | None = Field(
        default=None,
        description="Path to log file for local file logging",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if str(v).upper() not in valid_levels:
            msg = f"Invalid log level: {v}. Must be one of {valid_levels}"
            raise ValueError(msg)
        return str(v).upper()

    @field_validator("log_format", mode="before")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format value."""
        valid_formats = {"json", "plain"}
        if str(v).lower() not in valid_formats:
            msg = f"Invalid log format: {v}. Must be one of {valid_formats}"
            raise ValueError(msg)
        return str(v).lower()


class ProviderSettings(BaseSettings):
    """Process-wide provider configuration.

    Numeric tuning values are kept as raw strings so that the resolver can
    apply its lenient parsing instead of failing at load time.
    """

    instance: ClassVar[Any] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    anthropic_api_key: str | None = Field(
        default=None,
        validation_alias=PRIMARY_KEY_ENV,
        description="API key for the OpenRouter gateway (historically an Anthropic key).",
    )
    perplexity_api_key: str | None = Field(
        default=None,
        validation_alias=SECONDARY_KEY_ENV,
        description="Perplexity API key used for research requests.",
    )
    site_url: str | None = Field(
        default=None,
        validation_alias=SITE_URL_ENV,
        description="Site URL sent to OpenRouter as HTTP-Referer.",
    )
    site_name: str | None = Field(
        default=None,
        validation_alias=SITE_NAME_ENV,
        description="Site name sent to OpenRouter as X-Title.",
    )
    model: str | None = Field(
        default=None,
        validation_alias=MODEL_ENV,
        description="Model identifier override.",
    )
    max_tokens: str | None = Field(
        default=None,
        validation_alias=MAX_TOKENS_ENV,
        description="Maximum tokens override, parsed as an integer.",
    )
    temperature: str | None = Field(
        default=None,
        validation_alias=TEMPERATURE_ENV,
        description="Sampling temperature override, parsed as a float.",
    )

    def as_environ(self) -> dict[str, str]:
        """Return the configured values keyed by their environment variable."""
        values = {
            PRIMARY_KEY_ENV: self.anthropic_api_key,
            SECONDARY_KEY_ENV: self.perplexity_api_key,
            SITE_URL_ENV: self.site_url,
            SITE_NAME_ENV: self.site_name,
            MODEL_ENV: self.model,
            MAX_TOKENS_ENV: self.max_tokens,
            TEMPERATURE_ENV: self.temperature,
        }
        return {name: value for name, value in values.items() if value is not None}


def get_settings() -> LoggingSettings:
    """Get the global logging settings instance.

    Returns:
        LoggingSettings: The settings instance

    """
    if LoggingSettings.instance is None:
        LoggingSettings.instance = LoggingSettings()
    return LoggingSettings.instance


def reset_settings() -> None:
    """Reset the global logging settings instance.

    This is mainly useful for testing.
    """
    LoggingSettings.instance = None


def get_provider_settings() -> ProviderSettings:
    """Get the global provider settings instance."""
    if ProviderSettings.instance is None:
        ProviderSettings.instance = ProviderSettings()
    return ProviderSettings.instance


def reset_provider_settings() -> None:
    """Reset the global provider settings instance."""
    ProviderSettings.instance = None
