"""Tests for reporter previews and summaries."""

from __future__ import annotations

import io
import unittest
from pathlib import Path

from skeletor.config_tree import CreationResult, traverse
from skeletor.documents import parse_config_document
from skeletor.report import PREVIEW_LIMIT, Reporter
from skeletor.ui_theme import DEFAULT_THEME, OCEAN_THEME, PLAIN_THEME, available_theme_names, resolve_theme


def _reporter(theme=PLAIN_THEME) -> tuple[Reporter, io.StringIO]:
    stream = io.StringIO()
    return Reporter(theme=theme, stream=stream), stream


class DryRunPreviewTests(unittest.TestCase):
    def test_preview_lists_tasks_relative_to_root(self) -> None:
        reporter, stream = _reporter()
        root = Path("out")
        tasks = traverse(root, {"src": {"main.py": ""}})

        reporter.dry_run_preview(tasks, root=root, ignore_patterns=("*.tmp",))

        output = stream.getvalue()
        self.assertIn("Dry run: no changes made", output)
        self.assertIn("2 operations would be applied (1 files, 1 directories)", output)
        self.assertIn("1. src/", output)
        self.assertIn("2. src/main.py", output)
        self.assertIn("- *.tmp", output)

    def test_preview_truncates_unless_verbose(self) -> None:
        tasks = traverse(Path("."), {f"f{i:02}.txt": "" for i in range(PREVIEW_LIMIT + 3)})

        reporter, stream = _reporter()
        reporter.dry_run_preview(tasks, verb="captured")
        verbose_reporter, verbose_stream = _reporter()
        verbose_reporter.dry_run_preview(tasks, verbose=True, verb="captured")

        self.assertIn("... and 3 more operations", stream.getvalue())
        self.assertIn("tip: use --verbose", stream.getvalue())
        self.assertIn("13 operations would be captured", stream.getvalue())
        self.assertNotIn("more operations", verbose_stream.getvalue())
        self.assertIn("f12.txt", verbose_stream.getvalue())

    def test_control_characters_in_names_are_escaped(self) -> None:
        reporter, stream = _reporter()

        reporter.dry_run_preview(traverse(Path("."), {"evil\x1b[2J.txt": ""}))

        self.assertNotIn("\x1b", stream.getvalue())
        self.assertIn("evil\\x1b[2J.txt", stream.getvalue())


class SummaryTests(unittest.TestCase):
    def test_apply_summary_reports_skips_and_overwrites(self) -> None:
        reporter, stream = _reporter()
        result = CreationResult(files_created=2, dirs_created=1)
        result.record_skipped("a.txt")
        result.record_overwritten("b.txt")

        reporter.apply_complete(result, tasks_total=4, duration=0.5)

        output = stream.getvalue()
        self.assertIn("Done: created 2 files and 1 directories from 4 operations in 0.50s", output)
        self.assertIn("Skipped 1 existing files", output)
        self.assertIn("tip: use --overwrite", output)
        self.assertIn("Overwrote 1 files", output)

    def test_snapshot_summary_mentions_binary_files(self) -> None:
        reporter, stream = _reporter()

        reporter.snapshot_complete(
            files=3,
            dirs=1,
            duration=0.25,
            output_path=Path("snap.yml"),
            binary_files=["x.bin"],
        )

        output = stream.getvalue()
        self.assertIn("captured 3 files and 1 directories", output)
        self.assertIn("Written to snap.yml", output)
        self.assertIn("1 binary files captured without contents", output)

    def test_info_summary_handles_missing_metadata(self) -> None:
        reporter, stream = _reporter()
        document = parse_config_document("notes: remember\n", require_directories=False)

        reporter.info_summary(Path(".skeletorrc"), document)

        output = stream.getvalue()
        self.assertIn("Created: not available", output)
        self.assertIn("Notes: remember", output)
        self.assertIn("Stats: not available", output)

    def test_colored_output_uses_theme_and_plain_output_has_no_escapes(self) -> None:
        colored, colored_stream = _reporter(DEFAULT_THEME)
        plain, plain_stream = _reporter(resolve_theme("default", no_color=True))

        colored.warning("careful")
        plain.warning("careful")

        self.assertIn(DEFAULT_THEME.warning, colored_stream.getvalue())
        self.assertEqual(plain_stream.getvalue(), "warning: careful\n")

    def test_theme_resolution_falls_back_to_default(self) -> None:
        self.assertIs(resolve_theme("OCEAN"), OCEAN_THEME)
        self.assertIs(resolve_theme("missing"), DEFAULT_THEME)
        self.assertIs(resolve_theme(None), DEFAULT_THEME)
        self.assertIs(resolve_theme("ocean", no_color=True), PLAIN_THEME)
        self.assertEqual(available_theme_names(), ("default", "ocean"))

    def test_yaml_output_is_highlighted_only_when_colored(self) -> None:
        colored, colored_stream = _reporter(DEFAULT_THEME)
        plain, plain_stream = _reporter()

        colored.yaml("directories: {}\n")
        plain.yaml("directories: {}\n")

        self.assertIn("\x1b[", colored_stream.getvalue())
        self.assertEqual(plain_stream.getvalue(), "directories: {}\n")


if __name__ == "__main__":
    unittest.main()
