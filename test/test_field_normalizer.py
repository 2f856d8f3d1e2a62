"""Tests for field definition normalization."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from ItemsProvider.core.fields import field_key, is_excluded, normalize_fields


class TestNormalizeMappingFields(unittest.TestCase):
    def test_key_resolution_order(self) -> None:
        fields = normalize_fields(
            {
                "a": {"key": "explicit", "name": "n", "data": "d"},
                "b": {"name": "by_name", "data": "d"},
                "c": {"data": "by_data"},
                "d": {},
            }
        )
        self.assertEqual([f["key"] for f in fields], ["explicit", "by_name", "by_data", "d"])

    def test_key_is_coerced_to_string(self) -> None:
        fields = normalize_fields({"x": {"key": 42}})
        self.assertEqual(fields[0]["key"], "42")

    def test_insertion_order_is_preserved(self) -> None:
        fields = normalize_fields({"z": {}, "a": {}, "m": {}})
        self.assertEqual([f["key"] for f in fields], ["z", "a", "m"])

    def test_local_field_is_not_searchable_or_sortable(self) -> None:
        fields = normalize_fields({"actions": {"isLocal": True, "sortable": True, "filterByFormatted": True}})
        self.assertEqual(
            fields[0],
            {"key": "actions", "isLocal": True, "searchable": False, "sortable": False},
        )

    def test_empty_mapping_key_is_not_searchable_or_sortable(self) -> None:
        fields = normalize_fields({"": {"label": "Blank"}})
        self.assertEqual(fields[0]["key"], "")
        self.assertFalse(fields[0]["searchable"])
        self.assertFalse(fields[0]["sortable"])

    def test_only_whitelisted_attributes_survive(self) -> None:
        fields = normalize_fields({"name": {"label": "Name", "tdClass": "x", "width": 200, "data": "name"}})
        self.assertEqual(fields[0], {"key": "name", "label": "Name", "tdClass": "x"})

    def test_input_mapping_is_not_mutated(self) -> None:
        source = {"actions": {"isLocal": True, "filterByFormatted": True}}
        normalize_fields(source)
        self.assertEqual(source, {"actions": {"isLocal": True, "filterByFormatted": True}})


class TestNormalizeSequenceFields(unittest.TestCase):
    def test_sequence_is_passed_through_unmodified(self) -> None:
        # The whitelist and local-field rules only apply to the mapping form.
        items = [{"key": "id", "width": 80}, {"key": "", "isLocal": True, "sortable": True}, "email"]
        fields = normalize_fields(items)
        self.assertEqual(fields, items)
        self.assertIs(fields[0], items[0])

    def test_none_yields_empty_list(self) -> None:
        self.assertEqual(normalize_fields(None), [])


class TestFieldHelpers(unittest.TestCase):
    def test_field_key(self) -> None:
        self.assertEqual(field_key("email"), "email")
        self.assertEqual(field_key({"key": 7}), "7")
        self.assertIsNone(field_key({"label": "no key"}))

    def test_is_excluded_requires_local_and_empty_key(self) -> None:
        self.assertTrue(is_excluded({"key": "", "isLocal": True}))
        self.assertFalse(is_excluded({"key": "actions", "isLocal": True}))
        self.assertFalse(is_excluded({"key": ""}))


if __name__ == "__main__":
    unittest.main()
