"""Service layer for ItemsProvider.

Exposes the grid-facing ``QueryProvider`` and a factory building it from
application configuration.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ItemsProvider.services.provider import (
    DEFAULT_PAGE_LENGTHS,
    HttpClient,
    PageLength,
    QueryProvider,
)

if TYPE_CHECKING:
    from ItemsProvider.config import AppConfig


def create_query_provider(
    config: AppConfig,
    http_client: HttpClient | None = None,
) -> QueryProvider:
    """Create a provider from configuration.

    Args:
        config: Application configuration.
        http_client: Transport to use; a ``DataTablesApiClient`` built from
            ``config.http`` when omitted.

    Returns:
        Configured QueryProvider instance.
    """
    if http_client is None:
        from ItemsProvider.transport.client import DataTablesApiClient

        http_client = DataTablesApiClient(
            timeout=config.http.timeout,
            max_attempts=config.http.max_attempts,
            headers=config.http.headers,
        )

    settings = config.provider
    search_filter = re.compile(settings.filter) if settings.filter_regex and settings.filter else settings.filter
    return QueryProvider(
        http_client,
        settings.fields,
        api_url=settings.api_url,
        method=settings.method,
        per_page=settings.per_page,
        current_page=settings.current_page,
        filter=search_filter,
        filter_ignored_fields=settings.filter_ignored_fields,
        filter_included_fields=settings.filter_included_fields,
        page_lengths=tuple(_page_length(value) for value in settings.page_lengths),
    )


def _page_length(value: int) -> PageLength:
    """Build a page-size choice; -1 is labelled 'All'."""
    return PageLength(value, "All" if value < 0 else str(value))


__all__ = [
    "DEFAULT_PAGE_LENGTHS",
    "HttpClient",
    "PageLength",
    "QueryProvider",
    "create_query_provider",
]
