"""JSON output renderers."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any, Sequence

import click

from ItemsProvider.renderers.base import OutputWriter, PageSummary


def render_json(rows: Sequence[Any], page: PageSummary) -> dict[str, Any]:
    """Render a page into a JSON-serializable document."""
    return {"rows": list(rows), "paging": asdict(page)}


class JsonOutputWriter(OutputWriter):
    """Echo each page as a JSON document on stdout."""

    def __init__(self, indent: int | None = 2) -> None:
        self.indent = indent

    def write_page(self, rows: Sequence[Any], page: PageSummary) -> None:
        click.echo(json.dumps(render_json(rows, page), ensure_ascii=False, indent=self.indent, default=str))
