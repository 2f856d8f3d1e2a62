"""Command implementations for the ItemsProvider CLI.

Encapsulates command logic, separated from CLI parameter handling and
output formatting.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from ItemsProvider.core.context import FetchContext
from ItemsProvider.core.querystring import stringify_query
from ItemsProvider.renderers import OutputWriter, PageSummary
from ItemsProvider.services import QueryProvider
from ItemsProvider.utils.log import log


@dataclass(slots=True)
class FetchCommand:
    """Fetch one page through the provider and hand it to the output writer."""

    provider: QueryProvider
    output_writer: OutputWriter
    context: FetchContext

    def execute(self) -> list[Any]:
        """Run the fetch and write the page.

        Returns:
            Rows returned by the provider.
        """
        log.debug(
            "Fetching page=%d per_page=%d sort_by=%s",
            self.context.current_page,
            self.context.per_page,
            self.context.sort_by,
        )
        rows = self.provider.execute_query(self.context)
        log.debug("Fetched %d rows from %s", len(rows), self.provider.ajax_url or "local items")
        self.output_writer.write_page(rows, PageSummary.from_provider(self.provider))
        return rows


@dataclass(slots=True)
class QueryCommand:
    """Render the request a fetch would send, without sending it."""

    provider: QueryProvider
    context: FetchContext

    def execute(self) -> str:
        """Return the GET URL, or the POST URL and JSON body."""
        base_url, query = self.provider.build_query(self.context)
        if self.provider.method == "POST":
            return f"POST {base_url}\n{json.dumps(query, indent=2, default=str)}"
        return f"GET {base_url}?{stringify_query(query)}"
