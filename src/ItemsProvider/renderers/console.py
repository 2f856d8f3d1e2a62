"""Console text output renderers."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

from ItemsProvider.renderers.base import OutputWriter, PageSummary
from ItemsProvider.utils.log import log


def render_text(rows: Iterable[Any], *, first_row: int = 1) -> str:
    """Render rows into a human-readable text block.

    Args:
        rows: Iterable of rows (mappings render as ``key=value`` pairs).
        first_row: Number printed in front of the first row.

    Returns:
        A formatted string ready to be printed.
    """
    lines: list[str] = []
    for idx, row in enumerate(rows, start=first_row):
        if isinstance(row, Mapping):
            body = "  ".join(f"{key}={value}" for key, value in row.items())
        else:
            body = str(row)
        lines.append(f"{idx}. {body}")
    return "\n".join(lines) + "\n" if lines else ""


class ConsoleOutputWriter(OutputWriter):
    """Write results to console via logging."""

    def write_page(self, rows: Sequence[Any], page: PageSummary) -> None:
        for line in render_text(rows, first_row=max(page.start_row, 1)).splitlines():
            log.info(line)
        log.info(page.describe())
