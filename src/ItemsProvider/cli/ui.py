"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

import re
from pathlib import Path

import click
from dotenv import load_dotenv

from ItemsProvider.cli.runner import CommandRunner
from ItemsProvider.config import load_config
from ItemsProvider.core.context import FetchContext
from ItemsProvider.renderers import OUTPUT_FORMATS


@click.group(help="ItemsProvider: query DataTables-style endpoints page by page.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=Path("config/default.yml"),
    show_default=True,
    help="Path to YAML config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config.
    """
    load_dotenv()
    ctx.obj = load_config(config_path)


def _context_options(func):
    """Attach the grid context options shared by all commands."""
    options = [
        click.option("--page", "current_page", type=int, default=None, help="Page number (1-based)."),
        click.option("--per-page", type=int, default=None, help="Rows per page, -1 for all."),
        click.option("--sort-by", default=None, help="Field key to sort by."),
        click.option("--desc", "sort_desc", is_flag=True, default=False, help="Sort descending."),
        click.option("--filter", "search_filter", default=None, help="Free-text filter."),
        click.option("--api-url", default=None, help="Override provider.api_url."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_context(
    ctx: click.Context,
    current_page: int | None,
    per_page: int | None,
    sort_by: str | None,
    sort_desc: bool,
    search_filter: str | None,
    api_url: str | None,
) -> FetchContext:
    """Merge command-line options over the configured paging defaults."""
    settings = ctx.obj.provider
    return FetchContext(
        current_page=current_page if current_page is not None else settings.current_page,
        per_page=per_page if per_page is not None else settings.per_page,
        sort_by=sort_by,
        sort_desc=sort_desc,
        filter=search_filter if search_filter is not None else _configured_filter(settings),
        api_url=api_url,
    )


def _configured_filter(settings) -> str | re.Pattern[str] | None:
    """Return the configured filter, compiled when it is a regular expression."""
    if settings.filter_regex and settings.filter:
        return re.compile(settings.filter)
    return settings.filter


@cli.command("fetch")
@_context_options
@click.option(
    "--local-items",
    "local_items_path",
    type=click.Path(path_type=Path, dir_okay=False, exists=True),
    default=None,
    help="JSON array of rows served instead of calling the API.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default="console",
    show_default=True,
)
@click.pass_context
def fetch_cmd(
    ctx: click.Context,
    current_page: int | None,
    per_page: int | None,
    sort_by: str | None,
    sort_desc: bool,
    search_filter: str | None,
    api_url: str | None,
    local_items_path: Path | None,
    output_format: str,
) -> None:
    """Fetch one page of rows and print it.

    Raises:
        click.Abort: When the fetch fails.
    """
    context = _build_context(ctx, current_page, per_page, sort_by, sort_desc, search_filter, api_url)
    runner = CommandRunner(ctx.obj)
    runner.run_fetch(
        action=ctx.command.name,
        context=context,
        output_format=output_format,
        local_items_path=local_items_path,
    )


@cli.command("query")
@_context_options
@click.pass_context
def query_cmd(
    ctx: click.Context,
    current_page: int | None,
    per_page: int | None,
    sort_by: str | None,
    sort_desc: bool,
    search_filter: str | None,
    api_url: str | None,
) -> None:
    """Print the request a fetch would send, without sending it."""
    context = _build_context(ctx, current_page, per_page, sort_by, sort_desc, search_filter, api_url)
    CommandRunner(ctx.obj).run_query(action=ctx.command.name, context=context)
