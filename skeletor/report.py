"""Human-readable progress, preview and summary output.

The reporter only displays what the engine produced; nothing here influences
which files are written or captured.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO

from .config_tree.traverse import relative_label
from .config_tree.types import CreationResult, DirTask, FileTask, Task, summarize_tasks
from .documents import ConfigDocument
from .highlight import colorize_yaml, sanitize_terminal_text
from .ui_theme import PLAIN_THEME, UITheme

PREVIEW_LIMIT = 10
LIST_LIMIT = 5


class Reporter:
    """Writes themed status lines to ``stream`` (stdout by default)."""

    def __init__(
        self,
        theme: UITheme = PLAIN_THEME,
        stream: TextIO | None = None,
        style: str | None = None,
    ) -> None:
        self.theme = theme
        self.stream = stream if stream is not None else sys.stdout
        self.style = style

    @property
    def colored(self) -> bool:
        return self.theme is not PLAIN_THEME

    def _paint(self, text: str, color: str) -> str:
        if not color:
            return text
        return f"{color}{text}{self.theme.reset}"

    def _line(self, text: str = "") -> None:
        self.stream.write(text + "\n")

    def operation_start(self, operation: str, details: str) -> None:
        self._line(f"{self._paint(operation, self.theme.heading)}: {details}")

    def warning(self, message: str) -> None:
        self._line(f"{self._paint('warning', self.theme.warning)}: {sanitize_terminal_text(message)}")

    def tip(self, message: str) -> None:
        self._line(f"{self._paint('tip', self.theme.tip)}: {message}")

    def _task_line(self, index: int, task: Task, root: Path | None) -> str:
        label = relative_label(task.path, root) if root is not None else str(task.path)
        label = sanitize_terminal_text(label)
        if isinstance(task, DirTask):
            return f"  {index}. {self._paint(label + '/', self.theme.dir)}"
        if isinstance(task, FileTask):
            return f"  {index}. {self._paint(label, self.theme.file)}"
        raise TypeError(f"unsupported task: {task!r}")

    def _string_list(self, title: str, items: list[str], verbose: bool, tip: str | None = None) -> None:
        if not items:
            return
        self._line(self._paint(title, self.theme.heading))
        shown = items if verbose or len(items) <= LIST_LIMIT else items[:LIST_LIMIT]
        for item in shown:
            self._line(f"  - {sanitize_terminal_text(item)}")
        if len(shown) < len(items):
            self._line(self._paint(f"  ... and {len(items) - len(shown)} more", self.theme.dim))
            if tip:
                self.tip(tip)

    def dry_run_preview(
        self,
        tasks: list[Task],
        *,
        verbose: bool = False,
        binary_files: list[str] | None = None,
        ignore_patterns: list[str] | tuple[str, ...] | None = None,
        verb: str = "applied",
        root: Path | None = None,
    ) -> None:
        """Preview what a run would do without touching the filesystem."""
        files, dirs = summarize_tasks(tasks)
        self._line(self._paint("Dry run: no changes made", self.theme.heading))
        self._line(
            f"{self._paint(str(len(tasks)), self.theme.count)} operations would be {verb} "
            f"({files} files, {dirs} directories)"
        )
        limit = len(tasks) if verbose else PREVIEW_LIMIT
        for index, task in enumerate(tasks[:limit], start=1):
            self._line(self._task_line(index, task, root))
        if len(tasks) > limit:
            self._line(self._paint(f"  ... and {len(tasks) - limit} more operations", self.theme.dim))
            self.tip("use --verbose to list every operation")
        self._string_list("Binary files (contents omitted):", list(binary_files or []), verbose)
        self._string_list("Ignore patterns:", list(ignore_patterns or []), verbose)

    def apply_complete(
        self,
        result: CreationResult,
        *,
        tasks_total: int,
        duration: float,
        verbose: bool = False,
    ) -> None:
        self._line(
            f"{self._paint('Done', self.theme.success)}: created "
            f"{self._paint(str(result.files_created), self.theme.count)} files and "
            f"{self._paint(str(result.dirs_created), self.theme.count)} directories "
            f"from {tasks_total} operations in {duration:.2f}s"
        )
        if result.files_skipped:
            self._line(f"Skipped {result.files_skipped} existing files")
            self._string_list(
                "Skipped files:",
                result.skipped_files,
                verbose,
                tip="use --verbose to list every skipped file",
            )
            self.tip("use --overwrite to replace existing files")
        if result.files_overwritten:
            self._line(f"Overwrote {result.files_overwritten} files")
            self._string_list("Overwritten files:", result.overwritten_files, verbose)

    def snapshot_complete(
        self,
        *,
        files: int,
        dirs: int,
        duration: float,
        output_path: Path,
        binary_files: list[str],
        verbose: bool = False,
    ) -> None:
        self._line(
            f"{self._paint('Snapshot', self.theme.success)}: captured "
            f"{self._paint(str(files), self.theme.count)} files and "
            f"{self._paint(str(dirs), self.theme.count)} directories in {duration:.2f}s"
        )
        self._line(f"Written to {sanitize_terminal_text(str(output_path))}")
        if binary_files:
            self._line(f"{len(binary_files)} binary files captured without contents")
            self._string_list("Binary files:", binary_files, verbose)

    def yaml(self, text: str) -> None:
        """Write a YAML document, highlighted when color is enabled."""
        if self.colored:
            self.stream.write(colorize_yaml(text, self.style))
        else:
            self.stream.write(text)

    def info_summary(self, path: Path, document: ConfigDocument) -> None:
        self._line(self._paint(f"Information from {path}:", self.theme.heading))
        self._line(f"  Created: {document.created or 'not available'}")
        self._line(f"  Updated: {document.updated or 'not available'}")
        if document.generated_comments:
            self._line("  Generated comments:")
            for line in document.generated_comments.splitlines():
                self._line(f"    {sanitize_terminal_text(line)}")
        else:
            self._line("  Generated comments: not available")
        if document.notes:
            self._line(f"  Notes: {sanitize_terminal_text(document.notes)}")
        if document.stats is not None:
            files, dirs = document.stats
            self._line(f"  Stats: {files} files, {dirs} directories")
        else:
            self._line("  Stats: not available")
        self._string_list("  Binary files:", document.binary_files, True)
        self._string_list("  Ignore patterns:", document.ignore_patterns, True)


__all__ = [
    "PREVIEW_LIMIT",
    "LIST_LIMIT",
    "Reporter",
]
