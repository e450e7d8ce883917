"""Task datatypes produced by traversal and consumed by the materializer."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class DirTask:
    """Create ``path`` and any missing ancestors."""

    path: Path


@dataclass(frozen=True)
class FileTask:
    """Write ``content`` as the entire body of ``path``."""

    path: Path
    content: str


Task = DirTask | FileTask


@dataclass
class CreationResult:
    """Aggregate counters accumulated while tasks are materialized."""

    files_created: int = 0
    dirs_created: int = 0
    files_skipped: int = 0
    skipped_files: list[str] = field(default_factory=list)
    files_overwritten: int = 0
    overwritten_files: list[str] = field(default_factory=list)

    def record_skipped(self, label: str) -> None:
        self.files_skipped += 1
        self.skipped_files.append(label)

    def record_overwritten(self, label: str) -> None:
        self.files_overwritten += 1
        self.overwritten_files.append(label)


def summarize_tasks(tasks: list[Task]) -> tuple[int, int]:
    """Return ``(file_count, dir_count)`` for ``tasks``."""
    files = 0
    dirs = 0
    for task in tasks:
        if isinstance(task, FileTask):
            files += 1
        elif isinstance(task, DirTask):
            dirs += 1
        else:
            raise TypeError(f"unsupported task: {task!r}")
    return files, dirs


__all__ = [
    "DirTask",
    "FileTask",
    "Task",
    "CreationResult",
    "summarize_tasks",
]
