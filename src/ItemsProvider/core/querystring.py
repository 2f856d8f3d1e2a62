"""URL query-string codec for DataTables-style server parameters.

``parse_query_string`` turns ``a=1&cols[0]=x&cols[1]=y`` into
``{"a": "1", "cols": ["x", "y"]}`` and ``stringify_query`` writes nested
mappings/lists back as bracketed keys (``search[value]=...``).
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Sequence
from urllib.parse import quote, unquote

# Characters encodeURIComponent leaves untouched besides alphanumerics.
_UNRESERVED = "-_.!~*'()"
_INDEXED_KEY_RE = re.compile(r"^(\w+)\[(\d+)\]$")
# Larger indices are kept as literal keys instead of padding a list.
ARRAY_INDEX_LIMIT = 1000


def safe_decode(text: str) -> str:
    """URL-decode a query-string component.

    ``+`` is decoded as a space. Malformed percent-escapes never raise: the raw
    text is returned unchanged instead.
    """
    try:
        return unquote(text.replace("+", " "), errors="strict")
    except UnicodeDecodeError:
        return text


def safe_encode(value: Any) -> str:
    """URL-encode a scalar the way ``encodeURIComponent`` does.

    Text that cannot be encoded (e.g. lone surrogates) is returned unchanged.
    """
    text = _scalar_text(value)
    try:
        return quote(text, safe=_UNRESERVED)
    except UnicodeEncodeError:
        return text


def parse_query_string(qstr: str | None) -> dict[str, Any]:
    """Parse a query string into a mapping.

    Keys of the form ``name[n]`` are collected into a list under ``name`` at
    position ``n`` (up to ``ARRAY_INDEX_LIMIT``); any other key (including nested ones such as
    ``search[value]``) is kept verbatim as a scalar entry. Duplicate plain keys
    keep the last value.

    Args:
        qstr: Query string with or without a leading ``?`` or ``#``.

    Returns:
        Mapping of decoded keys to decoded string values or lists of them.
    """
    text = qstr or ""
    if text[:1] in ("?", "#"):
        text = text[1:]

    result: dict[str, Any] = {}
    for pair in text.split("&"):
        if not pair:
            continue
        raw_key, _, raw_value = pair.partition("=")
        key = safe_decode(raw_key)
        value = safe_decode(raw_value)

        match = _INDEXED_KEY_RE.match(key)
        if match is None:
            result[key] = value
            continue

        name, index = match.group(1), int(match.group(2))
        if index > ARRAY_INDEX_LIMIT:
            result[key] = value
            continue
        items = result.get(name)
        if not isinstance(items, list):
            items = []
            result[name] = items
        if index >= len(items):
            items.extend([None] * (index + 1 - len(items)))
        items[index] = value
    return result


def stringify_query(obj: Mapping[str, Any] | Sequence[Any], prefix: str | None = None) -> str:
    """Serialize a nested mapping into a query string.

    Nested mappings and lists recurse with ``prefix[key]`` names. ``None``
    values are omitted, booleans are written as ``true``/``false``.

    Args:
        obj: Mapping (or list, when recursing) to serialize.
        prefix: Key prefix for nested structures.

    Returns:
        ``&``-joined ``key=value`` pairs.
    """
    items = obj.items() if isinstance(obj, Mapping) else enumerate(obj)
    parts: list[str] = []
    for name, value in items:
        if value is None:
            continue
        key = f"{prefix}[{name}]" if prefix else str(name)
        if isinstance(value, (Mapping, list, tuple)):
            nested = stringify_query(value, key)
            if nested:
                parts.append(nested)
            continue
        parts.append(f"{safe_encode(key)}={safe_encode(value)}")
    return "&".join(parts)


def _scalar_text(value: Any) -> str:
    """Render a scalar for the wire format."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
