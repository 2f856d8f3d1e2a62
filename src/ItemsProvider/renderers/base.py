"""Base classes for output writers.

Separates the fetched page from how it is displayed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Sequence

from ItemsProvider.services.provider import QueryProvider


@dataclass(frozen=True, slots=True)
class PageSummary:
    """Paging counters of a provider after one fetch."""

    current_page: int
    per_page: int
    total_rows: int
    start_row: int
    end_row: int
    page_count: int

    @classmethod
    def from_provider(cls, provider: QueryProvider) -> PageSummary:
        """Snapshot the provider counters."""
        return cls(
            current_page=provider.current_page,
            per_page=provider.per_page,
            total_rows=provider.total_rows,
            start_row=provider.start_row,
            end_row=provider.end_row,
            page_count=provider.page_count,
        )

    def describe(self) -> str:
        """Return the grid footer text, e.g. 'Showing rows 11 to 20 of 25'."""
        if self.total_rows <= 0:
            return "No rows"
        return f"Showing rows {self.start_row} to {self.end_row} of {self.total_rows}"


class OutputWriter(ABC):
    """Abstract base class for command output writers."""

    @abstractmethod
    def write_page(self, rows: Sequence[Any], page: PageSummary) -> None:
        """Write one fetched page.

        Args:
            rows: Rows returned by the provider.
            page: Paging counters after the fetch.
        """
