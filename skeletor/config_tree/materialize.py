"""Best-effort execution of a task list against the real filesystem.

One failing directory or file never aborts the run: the failure is logged as a
warning, the item is left out of the counters, and the next task proceeds.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from .traverse import relative_label
from .types import CreationResult, DirTask, FileTask, Task

logger = logging.getLogger(__name__)


def current_umask() -> int:
    """Return the process umask. Reading it means setting it, so call sparingly."""
    umask = os.umask(0)
    os.umask(umask)
    return umask


def write_text_replacing(path: Path, content: str, new_file_mode: int | None = None) -> None:
    """Write ``content`` as the whole of ``path`` via a sibling temp file.

    Readers see either the previous file or the new one, never a partial
    write. Newlines are written untranslated. An existing file keeps its
    mode; a new one gets ``new_file_mode``, by default ``0o666`` less the umask.
    """
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with open(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
        if path.exists():
            try:
                os.chmod(tmp_name, path.stat().st_mode & 0o7777)
            except OSError:
                pass
        else:
            if new_file_mode is None:
                new_file_mode = 0o666 & ~current_umask()
            os.chmod(tmp_name, new_file_mode)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise


def _create_directory(task: DirTask, result: CreationResult) -> None:
    try:
        task.path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.warning("Failed to create directory %s: %s", task.path, exc)
        return
    result.dirs_created += 1
    logger.info("Created directory: %s", task.path)


def _write_file(
    task: FileTask,
    overwrite: bool,
    label: str,
    result: CreationResult,
    new_file_mode: int,
) -> None:
    path = task.path
    existed = os.path.lexists(path)
    if existed and not overwrite:
        logger.info("Skipping file creation, already exists: %s", path)
        result.record_skipped(label)
        return

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.warning("Failed to create parent directory for file %s: %s", path, exc)
        return

    try:
        write_text_replacing(path, task.content, new_file_mode)
    except OSError as exc:
        logger.warning("Failed to write file %s: %s", path, exc)
        return

    result.files_created += 1
    if existed:
        result.record_overwritten(label)
        logger.info("Overwrote file: %s", path)
    else:
        logger.info("Created file: %s", path)


def materialize(tasks: list[Task], overwrite: bool, root: Path | None = None) -> CreationResult:
    """Apply ``tasks`` in order and return the aggregated counters.

    Skipped and overwritten paths are reported relative to ``root`` when it
    is given.
    """
    result = CreationResult()
    new_file_mode = 0o666 & ~current_umask()
    for task in tasks:
        label = relative_label(task.path, root) if root is not None else str(task.path)
        if isinstance(task, DirTask):
            _create_directory(task, result)
        elif isinstance(task, FileTask):
            _write_file(task, overwrite, label, result, new_file_mode)
        else:
            raise TypeError(f"unsupported task: {task!r}")
    return result


__all__ = [
    "current_umask",
    "write_text_replacing",
    "materialize",
]
