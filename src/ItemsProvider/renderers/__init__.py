"""Output renderers for fetched pages.

Exports the OutputWriter base for new output formats and a factory that
instantiates writers by format name.
"""

from __future__ import annotations

from ItemsProvider.renderers.base import OutputWriter, PageSummary
from ItemsProvider.renderers.console import ConsoleOutputWriter, render_text
from ItemsProvider.renderers.json import JsonOutputWriter, render_json

OUTPUT_FORMATS = ("console", "json")


def create_output_writer(output_format: str) -> OutputWriter:
    """Create output writer for a format name.

    Raises:
        ValueError: If the format is unknown.
    """
    if output_format == "console":
        return ConsoleOutputWriter()
    if output_format == "json":
        return JsonOutputWriter()
    raise ValueError(f"Unsupported output format: {output_format}")


__all__ = [
    "OUTPUT_FORMATS",
    "OutputWriter",
    "PageSummary",
    "ConsoleOutputWriter",
    "JsonOutputWriter",
    "render_json",
    "render_text",
    "create_output_writer",
]
