"""Provider domain configuration: endpoint, paging defaults and fields."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from ItemsProvider.config.common import (
    expect_bool,
    expect_int,
    expect_int_list,
    expect_optional_str,
    expect_str,
    expect_str_list,
    get_required_value,
    get_section,
)

_ALLOWED_METHODS = {"GET", "POST"}
_DEFAULT_PAGE_LENGTHS = [15, 100, 500, 1000, -1]


@dataclass(frozen=True, slots=True)
class ProviderConfig:
    """Store validated provider settings.

    Attributes:
        api_url: Endpoint URL, optionally with extra query parameters.
        method: GET or POST.
        per_page: Initial page size (-1 for all rows).
        current_page: Initial page.
        filter: Initial free-text filter.
        filter_regex: Whether ``filter`` is sent as a regular expression.
        filter_ignored_fields: Keys sent as non-searchable.
        filter_included_fields: Keys always sent as searchable.
        page_lengths: Page-size choices offered to the grid.
        fields: Raw field definitions (mapping or list).
    """

    api_url: str
    method: str
    per_page: int
    current_page: int
    filter: str | None
    filter_regex: bool
    filter_ignored_fields: tuple[str, ...]
    filter_included_fields: tuple[str, ...]
    page_lengths: tuple[int, ...]
    fields: Mapping[str, Any] | Sequence[Any]


def load_provider(raw: Mapping[str, Any]) -> ProviderConfig:
    """Load provider domain config from raw mapping.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed provider configuration.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = get_section(raw, "provider", required=True)
    return ProviderConfig(
        api_url=expect_str(get_required_value(section, "api_url", "provider.api_url"), "provider.api_url").strip(),
        method=expect_str(section.get("method", "GET"), "provider.method").upper(),
        per_page=expect_int(section.get("per_page", 15), "provider.per_page"),
        current_page=expect_int(section.get("current_page", 1), "provider.current_page"),
        filter=expect_optional_str(section.get("filter"), "provider.filter"),
        filter_regex=expect_bool(section.get("filter_regex", False), "provider.filter_regex"),
        filter_ignored_fields=tuple(
            expect_str_list(section.get("filter_ignored_fields") or [], "provider.filter_ignored_fields")
        ),
        filter_included_fields=tuple(
            expect_str_list(section.get("filter_included_fields") or [], "provider.filter_included_fields")
        ),
        page_lengths=tuple(
            expect_int_list(section.get("page_lengths", _DEFAULT_PAGE_LENGTHS), "provider.page_lengths")
        ),
        fields=_load_fields(raw.get("fields")),
    )


def check_provider(config: ProviderConfig) -> None:
    """Validate provider domain constraints.

    Raises:
        ValueError: If values violate provider constraints.
    """
    if not config.api_url:
        raise ValueError("provider.api_url must not be empty")
    if config.method not in _ALLOWED_METHODS:
        raise ValueError(f"provider.method must be one of {sorted(_ALLOWED_METHODS)}")
    if config.per_page == 0 or config.per_page < -1:
        raise ValueError("provider.per_page must be -1 or positive")
    if config.current_page < 1:
        raise ValueError("provider.current_page must be >= 1")
    for value in config.page_lengths:
        if value == 0 or value < -1:
            raise ValueError("provider.page_lengths entries must be -1 or positive")
    if config.filter_regex and not config.filter:
        raise ValueError("provider.filter_regex=true requires provider.filter")


def _load_fields(value: Any) -> Mapping[str, Any] | Sequence[Any]:
    """Validate the ``fields`` root entry (mapping or list)."""
    if value is None:
        return {}
    if isinstance(value, Mapping):
        for name, definition in value.items():
            if definition is not None and not isinstance(definition, Mapping):
                raise TypeError(f"fields.{name} must be an object")
        return {name: dict(definition or {}) for name, definition in value.items()}
    if isinstance(value, list):
        for idx, item in enumerate(value):
            if not isinstance(item, (str, Mapping)):
                raise TypeError(f"fields[{idx}] must be a string or an object")
        return list(value)
    raise TypeError("fields must be an object or a list")
