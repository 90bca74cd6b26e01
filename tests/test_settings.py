# tests/test_settings.py

"""Tests for the Settings configuration class."""

import unittest
from pathlib import Path

from jewelry_admin.config.settings import Settings
from jewelry_admin.models.catalog import ObjectKind


class TestSettings(unittest.TestCase):
    """Verify Settings constants and the page registry."""

    def test_api_url_is_https(self) -> None:
        """COSMIC_API_URL points at an https endpoint."""
        self.assertTrue(Settings.COSMIC_API_URL.startswith("https://"))

    def test_request_timeout_is_positive_int(self) -> None:
        """REQUEST_TIMEOUT must be a positive integer."""
        self.assertIsInstance(Settings.REQUEST_TIMEOUT, int)
        self.assertGreater(Settings.REQUEST_TIMEOUT, 0)

    def test_object_props_include_timestamps(self) -> None:
        """Sorting needs created_at, so it must be requested."""
        self.assertIn("created_at", Settings.OBJECT_PROPS)
        self.assertIn("metadata", Settings.OBJECT_PROPS)

    def test_object_depth_resolves_references(self) -> None:
        """Depth >= 1 so embedded products/collections come back."""
        self.assertGreaterEqual(Settings.OBJECT_DEPTH, 1)

    def test_object_kinds_cover_every_kind(self) -> None:
        """One page per ObjectKind, nothing more."""
        ids = [k["id"] for k in Settings.OBJECT_KINDS]
        self.assertEqual(sorted(ids), sorted(k.value for k in ObjectKind))

    def test_each_kind_has_required_keys(self) -> None:
        """Every registry entry has id and label."""
        for entry in Settings.OBJECT_KINDS:
            with self.subTest(kind=entry.get("id", "?")):
                self.assertIn("id", entry)
                self.assertIn("label", entry)

    def test_path_constants_are_paths(self) -> None:
        """Path-typed settings are Path instances."""
        self.assertIsInstance(Settings.BASE_DIR, Path)
        self.assertIsInstance(Settings.LOGS_DIR, Path)


if __name__ == "__main__":
    unittest.main()
