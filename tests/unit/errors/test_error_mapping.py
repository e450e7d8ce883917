"""Tests for user-facing error messages and OSError mapping."""

from __future__ import annotations

import errno
import unittest
from pathlib import Path

from skeletor.errors import (
    InvalidIgnorePatternError,
    MissingConfigKeyError,
    MissingDirectoryError,
    MissingFileError,
    PermissionDeniedError,
    SkeletorError,
    SkeletorIOError,
)


class FromOsErrorTests(unittest.TestCase):
    def test_mapping(self) -> None:
        path = Path("some/where")
        cases = [
            (PermissionError(errno.EACCES, "denied"), False, PermissionDeniedError),
            (FileNotFoundError(errno.ENOENT, "missing"), False, MissingFileError),
            (FileNotFoundError(errno.ENOENT, "missing"), True, MissingDirectoryError),
            (NotADirectoryError(errno.ENOTDIR, "not a dir"), False, MissingDirectoryError),
            (OSError(errno.EIO, "disk on fire"), False, SkeletorIOError),
        ]
        for exc, is_dir, expected in cases:
            with self.subTest(exc=exc, is_dir=is_dir):
                mapped = SkeletorError.from_os_error(exc, path, is_dir=is_dir)
                self.assertIsInstance(mapped, expected)
                self.assertEqual(mapped.path, path)

    def test_io_error_message_uses_strerror(self) -> None:
        mapped = SkeletorError.from_os_error(OSError(errno.EIO, "disk on fire"), Path("x"))

        self.assertIn("I/O error on 'x': disk on fire", str(mapped))


class MessageTests(unittest.TestCase):
    def test_tip_is_appended(self) -> None:
        message = str(MissingFileError(Path("cfg.yml")))

        self.assertEqual(message.splitlines()[0], "file not found: 'cfg.yml'")
        self.assertTrue(message.splitlines()[1].startswith("tip: "))

    def test_missing_key_tip_names_the_key(self) -> None:
        self.assertIn("'directories' mapping", str(MissingConfigKeyError("directories")))

    def test_invalid_pattern_message(self) -> None:
        error = InvalidIgnorePatternError("[a", "unclosed character class")

        self.assertIn("invalid ignore pattern: '[a' (unclosed character class)", str(error))


if __name__ == "__main__":
    unittest.main()
