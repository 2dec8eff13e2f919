"""Diagnostic CLI implementation using Typer."""

import asyncio
import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from ai_providers.config.resolver import (
    PRIMARY_KEY_ENV,
    SECONDARY_KEY_ENV,
    ConfigLayers,
)
from ai_providers.errors import NoProviderAvailableError
from ai_providers.llm.factory import describe_provider
from ai_providers.llm.selector import SelectionOptions, select_model
from ai_providers.llm.translator import translate_error
from ai_providers.utils.logging_setup import configure_logging
from ai_providers.utils.settings import get_provider_settings, get_settings

# Force terminal mode even in non-TTY environments
console = Console(force_terminal=True, force_interactive=False)


class CLIInterface:
    """Command Line Interface implementation."""

    def __init__(self) -> None:
        """Initialize the CLI interface."""
        self.logger = logging.getLogger(__name__)
        self.app = typer.Typer(
            name="ai-providers",
            help="Inspect AI provider selection and error messages.",
            add_completion=False,
        )
        self._setup_commands()

    @property
    def name(self) -> str:
        """Get the interface name."""
        return "CLI"

    def _setup_commands(self) -> None:
        """Set up CLI commands."""
        self.app.command(name="select")(self.select)
        self.app.command(name="config")(self.config)
        self.app.command(name="explain")(self.explain)

    def _layers(self) -> ConfigLayers:
        return ConfigLayers.from_environment(settings=get_provider_settings())

    def select(
        self,
        research: Annotated[
            bool,
            typer.Option("--research", help="Request research capabilities."),
        ] = False,
        overloaded: Annotated[
            bool,
            typer.Option(
                "--overloaded",
                help="Treat the primary model as overloaded.",
            ),
        ] = False,
    ) -> None:
        """Show which provider would be selected for a request."""
        options = SelectionOptions(
            requires_research=research,
            primary_overloaded=overloaded,
        )
        self.logger.info(
            "Selecting provider (research=%s, overloaded=%s)",
            research,
            overloaded,
        )

        try:
            result = asyncio.run(select_model(self._layers(), options, log=self.logger))
        except NoProviderAvailableError as exc:
            console.print(f"[red]{exc}[/red]")
            for attempt in exc.attempts:
                console.print(f"  [yellow]{attempt.step}[/yellow]: {attempt.error}")
            raise typer.Exit(1) from exc

        descriptor = describe_provider(result.provider_type)
        table = Table(title="Selected provider")
        table.add_column("Provider")
        table.add_column("Type")
        table.add_column("Model")
        table.add_column("Base URL")
        table.add_row(
            descriptor.name,
            result.provider_type.value,
            result.model_name or "(provider default)",
            descriptor.base_url,
        )
        console.print(table)
        console.file.flush()

    def config(self) -> None:
        """Show the resolved model configuration and credential status."""
        layers = self._layers()
        model_config = layers.model_config()
        site = layers.site_metadata()

        table = Table(title="Resolved configuration")
        table.add_column("Setting")
        table.add_column("Value")
        table.add_row("model", model_config.model)
        table.add_row("max_tokens", str(model_config.max_tokens))
        table.add_row("temperature", str(model_config.temperature))
        table.add_row("site_url", site.site_url)
        table.add_row("site_name", site.site_name)
        for key_name in (PRIMARY_KEY_ENV, SECONDARY_KEY_ENV):
            key = layers.credential(key_name)
            status = f"set (length: {len(key)})" if key else "[red]missing[/red]"
            table.add_row(key_name, status)
        console.print(table)
        console.file.flush()

    def explain(
        self,
        message: Annotated[
            str,
            typer.Argument(help="Error message returned by the provider."),
        ] = "",
        status: Annotated[
            int | None,
            typer.Option("--status", "-s", help="HTTP status code of the error."),
        ] = None,
    ) -> None:
        """Print the user-facing text for a provider error."""
        console.print(translate_error({"status": status, "message": message}))
        console.file.flush()

    def run(self) -> None:
        """Run the CLI application."""
        self.app()


def main() -> None:
    """Configure logging and run the CLI."""
    configure_logging(get_settings())
    CLIInterface().run()
