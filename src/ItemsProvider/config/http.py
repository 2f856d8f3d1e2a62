"""HTTP transport configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from ItemsProvider.config.common import expect_float, expect_int, expect_str_mapping, get_section


@dataclass(frozen=True, slots=True)
class HttpConfig:
    """Store validated HTTP client settings."""

    timeout: float = 30.0
    max_attempts: int = 3
    headers: Mapping[str, str] = field(default_factory=dict)


def load_http(raw: Mapping[str, Any]) -> HttpConfig:
    """Load the optional ``http`` section.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "http", required=False)
    return HttpConfig(
        timeout=expect_float(section.get("timeout", 30.0), "http.timeout"),
        max_attempts=expect_int(section.get("max_attempts", 3), "http.max_attempts"),
        headers=expect_str_mapping(section.get("headers") or {}, "http.headers"),
    )


def check_http(config: HttpConfig) -> None:
    """Validate HTTP constraints.

    Raises:
        ValueError: If values violate HTTP constraints.
    """
    if config.timeout <= 0:
        raise ValueError("http.timeout must be positive")
    if config.max_attempts < 1:
        raise ValueError("http.max_attempts must be >= 1")
