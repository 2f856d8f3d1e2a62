"""Translate a grid context into a DataTables server query."""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any, Collection, Mapping, Sequence

from ItemsProvider.core.context import FetchContext
from ItemsProvider.core.fields import field_key, is_excluded

ServerQuery = dict[str, Any]
FieldTranslateHook = Callable[[dict[str, Any], dict[str, Any]], Any]

_STRUCTURAL_LISTS = ("order", "columns")


def translate_context(
    ctx: FetchContext,
    fields: Sequence[Any],
    *,
    base_query: Mapping[str, Any] | None = None,
    filter_ignored_fields: Collection[str] = (),
    filter_included_fields: Collection[str] = (),
    on_field_translate: FieldTranslateHook | None = None,
) -> ServerQuery:
    """Build the ``{draw, start, length, search, order, columns}`` query.

    Keys of ``base_query`` are applied over the skeleton before the fields are
    walked, so they may replace ``draw``, ``start``, ``length`` or ``search``.
    List values for ``order``/``columns`` seed those lists; other values for
    them are ignored.

    The hooks run for every field with ``(field, col)`` and may mutate both.
    Afterwards each field yields one ``columns`` entry except local fields
    with an empty key, which also never produce an ``order`` entry. The sort
    check uses the field key as left by the hooks. A field listed in
    ``filter_included_fields`` is searchable even when it is also in
    ``filter_ignored_fields``. At most one ``order`` entry is produced, and its
    ``column`` is the position in ``columns``.

    Args:
        ctx: Grid paging/sort/filter context.
        fields: Canonical field list (descriptors or bare key strings).
        base_query: Extra parameters, usually parsed from the API URL.
        filter_ignored_fields: Keys sent as non-searchable.
        filter_included_fields: Keys always sent as searchable.
        on_field_translate: Hook called with ``(field, col)`` for every field.

    Returns:
        The server query mapping.
    """
    query: ServerQuery = {
        "draw": 1,
        "start": (ctx.current_page - 1) * ctx.per_page,
        "length": ctx.per_page,
        "search": _search_entry(ctx.filter),
        "order": [],
        "columns": [],
    }

    for key, value in (base_query or {}).items():
        if key in _STRUCTURAL_LISTS:
            if isinstance(value, list):
                query[key] = list(value)
            continue
        query[key] = value

    sorted_applied = False
    for item in fields:
        field = {"key": item} if isinstance(item, str) else item
        key = field_key(field)
        sortable = field.get("sortable")
        col: dict[str, Any] = {
            "data": key,
            "name": key,
            "searchable": key not in filter_ignored_fields or key in filter_included_fields,
            "orderable": True if sortable is None else bool(sortable),
        }

        if callable(on_field_translate):
            on_field_translate(field, col)
        field_hook = field.get("onFieldTranslate")
        if callable(field_hook):
            field_hook(field, col)

        if is_excluded(field):
            continue

        key = field_key(field)
        if not sorted_applied and ctx.sort_by is not None and ctx.sort_by == key and col.get("orderable"):
            query["order"].append({"column": len(query["columns"]), "dir": "desc" if ctx.sort_desc else "asc"})
            sorted_applied = True

        query["columns"].append(col)

    return query


def _search_entry(search_filter: str | re.Pattern[str] | None) -> dict[str, Any]:
    """Build the global ``search`` entry from the grid filter."""
    if isinstance(search_filter, re.Pattern):
        return {"value": search_filter.pattern, "regex": True}
    return {"value": "" if search_filter is None else str(search_filter), "regex": False}
