"""CLI package for ItemsProvider command orchestration."""

from __future__ import annotations

__all__ = ["CommandRunner", "cli", "main"]

from ItemsProvider.cli.runner import CommandRunner
from ItemsProvider.cli.ui import cli


def main() -> None:
    """Run ItemsProvider CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
