"""Tests for persisted user defaults.

Malformed config data must fall back to built-in defaults, and configured
ignore patterns use the lenient file policy.
"""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from skeletor.highlight import DEFAULT_STYLE
from skeletor.ignore import compile_ignore_spec
from skeletor.runtime import config


class UserConfigTests(unittest.TestCase):
    def _write(self, tmp: str, payload: object) -> Path:
        path = Path(tmp) / "config.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    def test_missing_or_malformed_config_loads_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "absent.json"
            with mock.patch("skeletor.runtime.config.CONFIG_PATH", missing):
                self.assertEqual(config.load_config(), {})

            broken = Path(tmp) / "broken.json"
            broken.write_text("{not json", encoding="utf-8")
            with mock.patch("skeletor.runtime.config.CONFIG_PATH", broken):
                self.assertEqual(config.load_config(), {})
                self.assertEqual(config.load_style_name(), DEFAULT_STYLE)
                self.assertIsNone(config.load_theme_name())
                self.assertFalse(config.load_no_color())

            listed = self._write(tmp, ["not", "an", "object"])
            with mock.patch("skeletor.runtime.config.CONFIG_PATH", listed):
                self.assertEqual(config.load_config(), {})

    def test_values_are_read_and_sanitized(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp, {"style": "  native ", "theme": "ocean", "no_color": "yes"})
            with mock.patch("skeletor.runtime.config.CONFIG_PATH", path):
                self.assertEqual(config.load_style_name(), "native")
                self.assertEqual(config.load_theme_name(), "ocean")
                self.assertFalse(config.load_no_color())

            path = self._write(tmp, {"no_color": True, "theme": "   "})
            with mock.patch("skeletor.runtime.config.CONFIG_PATH", path):
                self.assertTrue(config.load_no_color())
                self.assertIsNone(config.load_theme_name())

    def test_default_ignore_patterns_are_lenient(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp, {"ignore_patterns": ["*.tmp", 3, "", "[bad"]})
            with mock.patch("skeletor.runtime.config.CONFIG_PATH", path):
                sources = config.load_default_ignore_sources()

                with self.assertLogs("skeletor.ignore", level="WARNING"):
                    spec = compile_ignore_spec(sources)

        self.assertEqual([source.text for source in sources], ["*.tmp", "[bad"])
        self.assertTrue(all(source.origin == path for source in sources))
        self.assertEqual(spec.patterns, ("*.tmp",))
        self.assertEqual(len(spec.warnings), 1)

    def test_non_list_ignore_patterns_are_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp, {"ignore_patterns": "*.tmp"})
            with mock.patch("skeletor.runtime.config.CONFIG_PATH", path):
                self.assertEqual(config.load_default_ignore_sources(), [])


if __name__ == "__main__":
    unittest.main()
