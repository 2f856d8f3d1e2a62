"""Command runner for coordinating CLI execution.

Manages logging configuration, component lifecycle and error handling for
command execution.
"""

from __future__ import annotations

import json
from pathlib import Path

import click

from ItemsProvider.cli.commands import FetchCommand, QueryCommand
from ItemsProvider.config import AppConfig
from ItemsProvider.core.context import FetchContext
from ItemsProvider.renderers import create_output_writer
from ItemsProvider.services import create_query_provider
from ItemsProvider.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution with proper resource management."""

    def __init__(self, config: AppConfig) -> None:
        """Initialize command runner.

        Args:
            config: Application configuration.
        """
        self.config = config

    def _configure_logging(self, action: str) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )

    def run_fetch(
        self,
        action: str,
        *,
        context: FetchContext,
        output_format: str,
        local_items_path: Path | None = None,
    ) -> None:
        """Fetch one page and write it in the requested format.

        Args:
            action: The CLI command name (e.g., 'fetch').
            context: Grid context for the page.
            output_format: Output writer name.
            local_items_path: Optional JSON file with rows served locally.

        Raises:
            click.Abort: When the fetch fails.
        """
        self._configure_logging(action)
        errors: list[Exception] = []
        try:
            provider = create_query_provider(self.config)
            provider.on_response_error = errors.append
            if local_items_path is not None:
                provider.set_local_items(_read_local_items(local_items_path))

            command = FetchCommand(
                provider=provider,
                output_writer=create_output_writer(output_format),
                context=context,
            )
            try:
                command.execute()
            finally:
                _close_client(provider.http_client)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Fetch failed: %s", e)
            raise click.Abort from e

        if errors:
            log.error("Fetch failed: %s", errors[-1])
            raise click.Abort

    def run_query(self, action: str, *, context: FetchContext) -> None:
        """Print the request a fetch would send.

        Raises:
            click.Abort: When the request cannot be built.
        """
        self._configure_logging(action)
        try:
            provider = create_query_provider(self.config)
            try:
                click.echo(QueryCommand(provider=provider, context=context).execute())
            finally:
                _close_client(provider.http_client)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Query failed: %s", e)
            raise click.Abort from e


def _read_local_items(path: Path) -> list:
    """Load a JSON array of rows."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON array")
    return data


def _close_client(client: object) -> None:
    close_func = getattr(client, "close", None)
    if callable(close_func):
        close_func()
