"""Grid context passed to the provider for one fetch."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class FetchContext:
    """Paging/sort/filter state supplied by the grid for one fetch.

    Attributes:
        current_page: 1-based page number.
        per_page: Page size; ``-1`` means all rows.
        sort_by: Key of the sorted field, or None when unsorted.
        sort_desc: Whether the sort is descending.
        filter: Free-text filter, or a compiled pattern for regex search.
        api_url: Optional URL overriding the provider's ``api_url``.
    """

    current_page: int = 1
    per_page: int = 15
    sort_by: str | None = None
    sort_desc: bool = False
    filter: str | re.Pattern[str] | None = None
    api_url: str | None = None

    @classmethod
    def coerce(
        cls,
        ctx: FetchContext | Mapping[str, Any],
        default: FetchContext | None = None,
    ) -> FetchContext:
        """Build a context from a grid mapping.

        Both camelCase (``currentPage``) and snake_case (``current_page``) keys
        are accepted. Keys missing from the mapping come from ``default``.
        """
        if isinstance(ctx, cls):
            return ctx
        base = default or cls()

        def pick(camel: str, snake: str, fallback: Any) -> Any:
            if camel in ctx:
                return ctx[camel]
            return ctx.get(snake, fallback)

        sort_by = pick("sortBy", "sort_by", base.sort_by)
        return cls(
            current_page=int(pick("currentPage", "current_page", base.current_page)),
            per_page=int(pick("perPage", "per_page", base.per_page)),
            sort_by=None if sort_by is None else str(sort_by),
            sort_desc=bool(pick("sortDesc", "sort_desc", base.sort_desc)),
            filter=ctx.get("filter", base.filter),
            api_url=pick("apiUrl", "api_url", base.api_url),
        )
