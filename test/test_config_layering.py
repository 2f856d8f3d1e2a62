"""Tests for layered config parsing and validation."""

import sys
import tempfile
import unittest
from copy import deepcopy
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from ItemsProvider.config import load_config, load_config_with_defaults, parse_config_dict
from ItemsProvider.services import create_query_provider


def _base_raw_config() -> dict:
    return {
        "log": {"level": "info", "to_file": False, "dir": "log"},
        "provider": {
            "api_url": "https://api.test/users?tenant=acme",
            "method": "get",
            "per_page": 25,
            "current_page": 1,
            "filter": None,
            "filter_ignored_fields": ["notes"],
            "filter_included_fields": [],
            "page_lengths": [10, 25, -1],
        },
        "http": {"timeout": 10, "max_attempts": 2, "headers": {"X-Api-Key": "secret"}},
        "fields": {
            "id": {"label": "ID", "sortable": True},
            "notes": {"label": "Notes"},
            "actions": {"isLocal": True},
        },
    }


class TestConfigLayering(unittest.TestCase):
    def test_parse_success_nested_access(self) -> None:
        cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertEqual(cfg.provider.method, "GET")
        self.assertEqual(cfg.provider.per_page, 25)
        self.assertEqual(cfg.provider.filter_ignored_fields, ("notes",))
        self.assertEqual(cfg.provider.page_lengths, (10, 25, -1))
        self.assertEqual(cfg.http.timeout, 10.0)
        self.assertEqual(cfg.http.headers, {"X-Api-Key": "secret"})
        self.assertEqual(list(cfg.provider.fields), ["id", "notes", "actions"])

    def test_optional_sections_have_defaults(self) -> None:
        raw = {"provider": {"api_url": "https://api.test"}}
        cfg = parse_config_dict(raw)
        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertFalse(cfg.runtime.to_file)
        self.assertEqual(cfg.provider.method, "GET")
        self.assertEqual(cfg.provider.per_page, 15)
        self.assertEqual(cfg.provider.page_lengths, (15, 100, 500, 1000, -1))
        self.assertEqual(cfg.http.max_attempts, 3)
        self.assertEqual(cfg.provider.fields, {})

    def test_missing_provider_section(self) -> None:
        with self.assertRaisesRegex(ValueError, "provider"):
            parse_config_dict({"log": {"level": "INFO"}})

    def test_missing_api_url(self) -> None:
        raw = _base_raw_config()
        del raw["provider"]["api_url"]
        with self.assertRaisesRegex(ValueError, "provider.api_url"):
            parse_config_dict(raw)

    def test_invalid_method(self) -> None:
        raw = _base_raw_config()
        raw["provider"]["method"] = "PUT"
        with self.assertRaisesRegex(ValueError, "provider.method"):
            parse_config_dict(raw)

    def test_invalid_per_page(self) -> None:
        raw = _base_raw_config()
        raw["provider"]["per_page"] = 0
        with self.assertRaisesRegex(ValueError, "provider.per_page"):
            parse_config_dict(raw)

    def test_per_page_type_error(self) -> None:
        raw = _base_raw_config()
        raw["provider"]["per_page"] = "15"
        with self.assertRaisesRegex(TypeError, "provider.per_page"):
            parse_config_dict(raw)

    def test_ignored_fields_must_be_strings(self) -> None:
        raw = _base_raw_config()
        raw["provider"]["filter_ignored_fields"] = ["ok", 3]
        with self.assertRaisesRegex(TypeError, r"provider.filter_ignored_fields\[1\]"):
            parse_config_dict(raw)

    def test_invalid_log_level(self) -> None:
        raw = _base_raw_config()
        raw["log"]["level"] = "verbose"
        with self.assertRaisesRegex(ValueError, "log.level"):
            parse_config_dict(raw)

    def test_invalid_http_timeout(self) -> None:
        raw = _base_raw_config()
        raw["http"]["timeout"] = 0
        with self.assertRaisesRegex(ValueError, "http.timeout"):
            parse_config_dict(raw)

    def test_fields_entry_must_be_object(self) -> None:
        raw = _base_raw_config()
        raw["fields"]["id"] = "ID"
        with self.assertRaisesRegex(TypeError, "fields.id"):
            parse_config_dict(raw)

    def test_fields_list_form(self) -> None:
        raw = _base_raw_config()
        raw["fields"] = ["id", {"key": "name"}]
        cfg = parse_config_dict(raw)
        self.assertEqual(cfg.provider.fields, ["id", {"key": "name"}])

    def test_regex_filter_requires_filter(self) -> None:
        raw = _base_raw_config()
        raw["provider"]["filter_regex"] = True
        with self.assertRaisesRegex(ValueError, "filter_regex"):
            parse_config_dict(raw)

    def test_input_mapping_not_mutated(self) -> None:
        raw = _base_raw_config()
        snapshot = deepcopy(raw)
        parse_config_dict(raw)
        self.assertEqual(raw, snapshot)


class TestConfigFiles(unittest.TestCase):
    def test_override_is_deep_merged(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            default_path = Path(tmp) / "default.yml"
            override_path = Path(tmp) / "override.yml"
            default_path.write_text(
                "provider:\n  api_url: https://api.test/users\n  per_page: 15\nhttp:\n  timeout: 30\n",
                encoding="utf-8",
            )
            override_path.write_text("provider:\n  method: POST\n", encoding="utf-8")

            cfg = load_config_with_defaults(override_path, default_path=default_path)

        self.assertEqual(cfg.provider.api_url, "https://api.test/users")
        self.assertEqual(cfg.provider.method, "POST")
        self.assertEqual(cfg.http.timeout, 30.0)

    def test_repository_default_config_loads(self) -> None:
        cfg = load_config(REPO_ROOT / "config" / "default.yml")
        self.assertEqual(cfg.provider.method, "GET")
        self.assertIn("actions", cfg.provider.fields)


class TestProviderFactory(unittest.TestCase):
    def test_provider_built_from_config(self) -> None:
        raw = _base_raw_config()
        raw["provider"]["filter"] = "^a"
        raw["provider"]["filter_regex"] = True
        cfg = parse_config_dict(raw)
        client = object()

        provider = create_query_provider(cfg, http_client=client)

        self.assertIs(provider.http_client, client)
        self.assertEqual(provider.api_url, "https://api.test/users?tenant=acme")
        self.assertEqual(provider.per_page, 25)
        self.assertEqual(provider.filter.pattern, "^a")
        self.assertEqual(provider.filter_ignored_fields, {"notes"})
        self.assertEqual([length.text for length in provider.page_lengths], ["10", "25", "All"])
        actions = provider.fields[2]
        self.assertEqual(actions["key"], "actions")
        self.assertFalse(actions["sortable"])

    def test_default_client_uses_http_settings(self) -> None:
        cfg = parse_config_dict(_base_raw_config())
        provider = create_query_provider(cfg)
        try:
            self.assertEqual(provider.http_client.timeout, 10.0)
            self.assertEqual(provider.http_client.max_attempts, 2)
            self.assertEqual(provider.http_client.headers["X-Api-Key"], "secret")
        finally:
            provider.http_client.close()


if __name__ == "__main__":
    unittest.main()
