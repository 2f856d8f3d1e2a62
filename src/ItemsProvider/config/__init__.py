from __future__ import annotations

"""Public configuration API for ItemsProvider."""

from ItemsProvider.config.app import (
    AppConfig,
    load_config,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
)
from ItemsProvider.config.http import HttpConfig
from ItemsProvider.config.provider import ProviderConfig
from ItemsProvider.config.runtime import RuntimeConfig

__all__ = [
    "RuntimeConfig",
    "ProviderConfig",
    "HttpConfig",
    "AppConfig",
    "load_config",
    "load_config_with_defaults",
    "merge_config_dicts",
    "parse_config_dict",
]
