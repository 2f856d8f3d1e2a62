"""Items provider that feeds a paginated grid from a DataTables endpoint."""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Sequence

from ItemsProvider.core.context import FetchContext
from ItemsProvider.core.fields import normalize_fields
from ItemsProvider.core.querystring import parse_query_string, stringify_query
from ItemsProvider.core.translate import FieldTranslateHook, ServerQuery, translate_context
from ItemsProvider.utils.log import log

SUPPORTED_METHODS = ("GET", "POST")


class HttpClient(Protocol):
    """Transport contract; responses expose the decoded payload as ``data``."""

    def get(self, url: str) -> Any:
        """Send a GET request."""
        raise NotImplementedError

    def post(self, url: str, body: Mapping[str, Any]) -> Any:
        """Send a POST request with ``body``."""
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class PageLength:
    """One page-size choice offered by the grid."""

    value: int
    text: str


DEFAULT_PAGE_LENGTHS: tuple[PageLength, ...] = (
    PageLength(15, "15"),
    PageLength(100, "100"),
    PageLength(500, "500"),
    PageLength(1000, "1000"),
    PageLength(-1, "All"),
)


class QueryProvider:
    """Translate grid state into server queries and track paging counters.

    The provider is created once per grid. ``items`` is the callable handed to
    the grid; every call computes a fresh query, then either returns the local
    items or fetches a page from ``api_url``. Transport failures never escape:
    they are reported to ``on_response_error`` and yield an empty page, leaving
    ``total_rows`` at its previous value.
    """

    _NAME = "ItemsProvider"

    def __init__(
        self,
        http_client: HttpClient,
        fields: Mapping[str, Any] | Sequence[Any] | None,
        *,
        api_url: str | None = None,
        method: str = "GET",
        per_page: int = 15,
        current_page: int = 1,
        filter: str | re.Pattern[str] | None = None,
        filter_ignored_fields: Sequence[str] = (),
        filter_included_fields: Sequence[str] = (),
        page_lengths: Sequence[PageLength] = DEFAULT_PAGE_LENGTHS,
        on_before_query: Callable[[ServerQuery, FetchContext], Any] | None = None,
        on_field_translate: FieldTranslateHook | None = None,
        on_response_complete: Callable[[Any], Any] | None = None,
        on_response_error: Callable[[Exception], Any] | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            http_client: Object exposing ``get(url)`` and ``post(url, body)``.
            fields: Field definitions, as a list or a mapping of name to descriptor.
            api_url: Endpoint URL; its query string is sent with every request.
            method: ``GET`` or ``POST``.
            per_page: Initial page size.
            current_page: Initial page.
            filter: Initial free-text filter.
            filter_ignored_fields: Keys sent as non-searchable.
            filter_included_fields: Keys always sent as searchable.
            page_lengths: Page-size choices offered to the grid.
            on_before_query: Called with ``(query, ctx)`` before dispatch.
            on_field_translate: Called with ``(field, col)`` for every column.
            on_response_complete: Called with the raw response on success.
            on_response_error: Called with the exception on failure.
        """
        self._http_client = http_client
        self._ajax_url: str | None = None
        self._query: ServerQuery | None = None
        self._local_items: list[Any] | None = None

        self.fields = normalize_fields(fields)
        self.api_url = api_url
        self.method = method
        self.per_page = per_page
        self.current_page = current_page
        self.filter = filter
        self.filter_ignored_fields = set(filter_ignored_fields)
        self.filter_included_fields = set(filter_included_fields)
        self.page_lengths = list(page_lengths)
        self.busy = False
        self.total_rows = 0
        self.start_row = 0
        self.end_row = 0

        self.on_before_query = on_before_query
        self.on_field_translate = on_field_translate
        self.on_response_complete = on_response_complete
        self.on_response_error = on_response_error

        # Bound once so the grid always sees the same callable.
        self.items = self.execute_query

    @property
    def method(self) -> str:
        return self._method

    @method.setter
    def method(self, value: str) -> None:
        normalized = (value or "GET").upper()
        if normalized not in SUPPORTED_METHODS:
            raise ValueError(f"method must be one of {SUPPORTED_METHODS}, got {value!r}")
        self._method = normalized

    @property
    def name(self) -> str:
        return self._NAME

    def get_name(self) -> str:
        """Return the component name."""
        return self._NAME

    @property
    def http_client(self) -> HttpClient:
        return self._http_client

    @property
    def server_params(self) -> ServerQuery | None:
        """Query computed by the last ``execute_query`` call."""
        return self._query

    @property
    def ajax_url(self) -> str | None:
        """Base URL (without query string) used by the last call."""
        return self._ajax_url

    @property
    def local_items(self) -> list[Any] | None:
        return self._local_items

    @local_items.setter
    def local_items(self, items: Sequence[Any] | None) -> None:
        self._local_items = None if items is None else list(items)

    def set_local_items(self, items: Sequence[Any] | None) -> None:
        """Serve ``items`` instead of querying the server."""
        self.local_items = items

    def clear_local_items(self) -> None:
        """Return to fetching from the server."""
        self._local_items = None

    @property
    def page_count(self) -> int:
        """Number of pages for the current ``total_rows`` and ``per_page``."""
        if self.total_rows <= 0 or self.per_page == 0:
            return 0
        if self.per_page < 0:
            return 1
        return math.ceil(self.total_rows / self.per_page)

    def context(self) -> FetchContext:
        """Return a context built from the provider's own paging state."""
        return FetchContext(
            current_page=self.current_page,
            per_page=self.per_page,
            filter=self.filter,
            api_url=self.api_url,
        )

    def reset_counter_vars(self) -> None:
        """Clear the visible row range."""
        self.start_row = 0
        self.end_row = 0

    def build_query(self, ctx: FetchContext | Mapping[str, Any]) -> tuple[str, ServerQuery]:
        """Compute the base URL and server query for ``ctx``.

        Parameters already present in the API URL's query string are merged
        into the query. Paging state and the network are not touched.

        Args:
            ctx: Grid context.

        Returns:
            Tuple of (base_url, query).
        """
        context = FetchContext.coerce(ctx, self.context())
        api_url = context.api_url or self.api_url or ""
        base_url, has_query, query_string = api_url.partition("?")
        base_query = parse_query_string(query_string) if has_query else {}

        query = translate_context(
            context,
            self.fields,
            base_query=base_query,
            filter_ignored_fields=self.filter_ignored_fields,
            filter_included_fields=self.filter_included_fields,
            on_field_translate=self.on_field_translate,
        )
        return base_url, query

    def build_request_url(self, ctx: FetchContext | Mapping[str, Any]) -> str:
        """Return the GET URL that would be requested for ``ctx``."""
        base_url, query = self.build_query(ctx)
        return f"{base_url}?{stringify_query(query)}"

    def execute_query(self, ctx: FetchContext | Mapping[str, Any]) -> list[Any]:
        """Return the rows for one grid refresh.

        Args:
            ctx: Grid context (``FetchContext`` or grid mapping).

        Returns:
            Rows for the requested page; an empty list when the request fails.
        """
        context = FetchContext.coerce(ctx, self.context())
        base_url, query = self.build_query(context)

        if callable(self.on_before_query):
            self.on_before_query(query, context)

        self._ajax_url = base_url
        self._query = query

        if self._local_items is not None:
            return self._serve_local_items()

        self.reset_counter_vars()
        self.busy = True
        try:
            response = self._dispatch(base_url, query)
            rows = self._handle_response(response, query)
        except Exception as error:  # noqa: BLE001 - grid always receives a row list
            self.busy = False
            log.warning("Items request failed: url=%s error=%s", base_url, error)
            if callable(self.on_response_error):
                self.on_response_error(error)
            return []

        self.busy = False
        return rows

    def _serve_local_items(self) -> list[Any]:
        """Publish counters for the local items and return them."""
        items = self._local_items or []
        self.current_page = 1
        self.total_rows = len(items)
        self.start_row = 1
        self.end_row = self.total_rows
        self.per_page = self.total_rows
        log.debug("Serving %d local items", self.total_rows)
        return self._local_items

    def _dispatch(self, base_url: str, query: ServerQuery) -> Any:
        """Send the query with the configured method."""
        if not base_url:
            raise ValueError("api_url is not configured")
        if self.method == "POST":
            log.debug("Items request: POST %s", base_url)
            return self._http_client.post(base_url, query)
        url = f"{base_url}?{stringify_query(query)}"
        log.debug("Items request: GET %s", url)
        return self._http_client.get(url)

    def _handle_response(self, response: Any, query: ServerQuery) -> list[Any]:
        """Update paging counters from a successful response."""
        if isinstance(response, Mapping):
            payload = response.get("data")
        else:
            payload = getattr(response, "data", None)
        if not isinstance(payload, Mapping):
            payload = {}

        records = payload.get("recordsFiltered")
        if records is None:
            records = payload.get("recordsTotal")
        self.total_rows = int(records or 0)

        start = int(query.get("start") or 0)
        length = int(query.get("length") or 0)
        self.start_row = start + 1
        self.end_row = start + length
        if self.end_row > self.total_rows or self.end_row < 0:
            self.end_row = self.total_rows

        log.debug(
            "Items response: total_rows=%d start_row=%d end_row=%d",
            self.total_rows,
            self.start_row,
            self.end_row,
        )

        if callable(self.on_response_complete):
            self.on_response_complete(response)

        rows = payload.get("data")
        return list(rows) if rows else []
