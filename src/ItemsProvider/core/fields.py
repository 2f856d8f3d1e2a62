"""Field definition normalization for the grid columns."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

# Attribute names carried over from mapping-form field definitions.
COPYABLE_ATTRIBUTES: tuple[str, ...] = (
    "onFieldTranslate",
    "searchable",
    "isLocal",
    "key",
    "label",
    "headerTitle",
    "headerAbbr",
    "class",
    "formatter",
    "sortable",
    "sortDirection",
    "sortByFormatted",
    "filterByFormatted",
    "tdClass",
    "thClass",
    "thStyle",
    "variant",
    "tdAttr",
    "thAttr",
    "isRowHeader",
    "stickyColumn",
)

FieldDescriptor = dict[str, Any]


def normalize_fields(fields: Mapping[str, Any] | Sequence[Any] | None) -> list[Any]:
    """Convert field definitions into the canonical ordered field list.

    A sequence is returned as a list without touching its items. A mapping of
    ``name -> descriptor`` is converted entry by entry: the ``key`` is resolved
    from ``key``, ``name``, ``data`` or the mapping key and coerced to ``str``;
    local fields and fields with an empty key are made non-searchable and
    non-sortable; only ``COPYABLE_ATTRIBUTES`` survive.

    Args:
        fields: Sequence of descriptors, or mapping of name to descriptor.

    Returns:
        Ordered list of field descriptors.
    """
    if fields is None:
        return []
    if not isinstance(fields, Mapping):
        return list(fields)

    normalized: list[Any] = []
    for name, definition in fields.items():
        field = dict(definition) if isinstance(definition, Mapping) else {}
        field["key"] = _resolve_key(field, name)

        if field.get("isLocal") or field["key"] == "":
            field["searchable"] = False
            field["sortable"] = False
            field.pop("filterByFormatted", None)

        normalized.append({attr: field[attr] for attr in COPYABLE_ATTRIBUTES if attr in field})
    return normalized


def field_key(field: Any) -> str | None:
    """Return the key of a descriptor or of a bare string field."""
    if isinstance(field, str):
        return field
    if isinstance(field, Mapping):
        key = field.get("key")
        return None if key is None else str(key)
    return None


def is_excluded(field: Mapping[str, Any]) -> bool:
    """Return True for local fields without a key, which never reach the server."""
    return bool(field.get("isLocal")) and field_key(field) == ""


def _resolve_key(field: Mapping[str, Any], fallback: Any) -> str:
    """Pick the first non-empty of key/name/data, else the mapping key."""
    for attr in ("key", "name", "data"):
        value = field.get(attr)
        if value not in (None, ""):
            return str(value)
    return str(fallback)
