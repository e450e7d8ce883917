"""Tests for snapshot timestamps and document assembly."""

from __future__ import annotations

import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path

from skeletor.snapshot import (
    SnapshotMetadata,
    build_metadata,
    build_snapshot_document,
    format_rfc3339,
    generated_comments,
    read_previous_created,
)

NOW = datetime(2024, 5, 6, 7, 8, 9, 123456, tzinfo=timezone.utc)


class TimestampTests(unittest.TestCase):
    def test_format_rfc3339_uses_utc_and_z_suffix(self) -> None:
        self.assertEqual(format_rfc3339(NOW), "2024-05-06T07:08:09Z")
        offset = datetime(2024, 5, 6, 9, 8, 9, tzinfo=timezone(timedelta(hours=2)))
        self.assertEqual(format_rfc3339(offset), "2024-05-06T07:08:09Z")

    def test_fresh_snapshot_uses_now_for_both(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            created, updated = build_metadata(Path(tmp) / "missing.yml", NOW)

        self.assertEqual(created, "2024-05-06T07:08:09Z")
        self.assertEqual(updated, created)

    def test_created_is_preserved_from_previous_output(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            output = Path(tmp) / ".skeletorrc"
            output.write_text('created: "2020-01-01T00:00:00Z"\ndirectories: {}\n', encoding="utf-8")

            created, updated = build_metadata(output, NOW)

        self.assertEqual(created, "2020-01-01T00:00:00Z")
        self.assertEqual(updated, "2024-05-06T07:08:09Z")

    def test_unquoted_previous_timestamp_is_normalized(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            output = Path(tmp) / ".skeletorrc"
            output.write_text("created: 2020-01-01T00:00:00Z\n", encoding="utf-8")

            self.assertEqual(read_previous_created(output), "2020-01-01T00:00:00Z")

    def test_unparseable_previous_output_falls_back_to_now(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            output = Path(tmp) / ".skeletorrc"
            output.write_text("created: [unterminated\n", encoding="utf-8")

            with self.assertLogs("skeletor.snapshot.metadata", level="WARNING"):
                created, updated = build_metadata(output, NOW)

        self.assertEqual(created, updated)
        self.assertEqual(updated, "2024-05-06T07:08:09Z")


class SnapshotDocumentTests(unittest.TestCase):
    def test_generated_comments_mention_binary_files(self) -> None:
        self.assertEqual(
            generated_comments(Path("proj"), ["a.bin", "b/c.png"]),
            "Snapshot generated from folder: proj\nBinary files detected (contents omitted): a.bin, b/c.png",
        )
        self.assertTrue(generated_comments(Path("proj"), []).endswith("No binary files detected."))

    def test_document_key_order(self) -> None:
        metadata = SnapshotMetadata(
            created="c",
            updated="u",
            generated_comments="g",
            file_count=1,
            dir_count=0,
            notes="n",
        )

        document = build_snapshot_document(metadata, {"a.txt": ""}, ["a.txt"], ("*.tmp",))

        self.assertEqual(
            list(document),
            ["created", "updated", "generated_comments", "notes", "stats", "binary_files", "ignore_patterns", "directories"],
        )
        self.assertEqual(document["stats"], {"files": 1, "directories": 0})

    def test_optional_keys_are_omitted_when_empty(self) -> None:
        metadata = SnapshotMetadata("c", "u", "g", 0, 0)

        document = build_snapshot_document(metadata, {}, [], ())

        self.assertEqual(list(document), ["created", "updated", "generated_comments", "stats", "directories"])


if __name__ == "__main__":
    unittest.main()
