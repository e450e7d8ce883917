"""Configuration-tree traversal into ordered filesystem tasks.

Tasks come out in pre-order: a directory's ``DirTask`` precedes every task
beneath it and siblings keep the mapping's declared order. Traversal uses an
explicit stack so very deep trees do not exhaust the interpreter stack.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping
from pathlib import Path, PurePosixPath

from ..errors import InvalidPathError
from ..ignore import IgnoreSpec
from .types import DirTask, FileTask, Task

logger = logging.getLogger(__name__)

_DRIVE_RE = re.compile(r"^[A-Za-z]:")
_SEGMENT_SPLIT_RE = re.compile(r"[\\/]")


def is_safe_name(name: str) -> bool:
    """Return whether mapping key ``name`` stays beneath its parent directory."""
    if not name or "\0" in name:
        return False
    if name.startswith(("/", "\\")) or _DRIVE_RE.match(name):
        return False
    return ".." not in _SEGMENT_SPLIT_RE.split(name)


def iter_tasks(root: Path, tree: Mapping[object, object], validate: bool = True) -> Iterator[Task]:
    """Yield tasks for ``tree`` under ``root`` in pre-order.

    Raises ``InvalidPathError`` at the first unsafe key; callers that need the
    all-or-nothing guarantee should use ``traverse``. With ``validate`` off,
    unsafe keys are logged and still yielded, for listings that never touch
    the filesystem.
    """
    stack: list[Iterator[tuple[object, object]]] = [iter(tree.items())]
    parents: list[Path] = [Path(root)]
    while stack:
        try:
            name, value = next(stack[-1])
        except StopIteration:
            stack.pop()
            parents.pop()
            continue

        parent = parents[-1]
        if not isinstance(name, str):
            logger.warning("Skipping non-string key %r under %s", name, parent)
            continue
        if not is_safe_name(name):
            if validate:
                raise InvalidPathError(name, parent)
            logger.warning("Entry %r under %s cannot be applied: unsafe path component", name, parent)

        child_path = parent / name
        if isinstance(value, Mapping):
            yield DirTask(child_path)
            stack.append(iter(value.items()))
            parents.append(child_path)
        elif isinstance(value, str):
            yield FileTask(child_path, value)
        else:
            logger.debug("Ignoring %s value at %s", type(value).__name__, child_path)


def traverse(root: Path, tree: Mapping[object, object]) -> list[Task]:
    """Convert a configuration tree into the full ordered task list.

    The list is only returned once every key has been validated, so an unsafe
    key fails the whole traversal before any task can be executed.
    """
    return list(iter_tasks(root, tree))


def relative_label(path: Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` with ``/`` separators."""
    try:
        relative = path.relative_to(root)
    except ValueError:
        relative = path
    return PurePosixPath(*relative.parts).as_posix() if relative.parts else "."


def filter_tasks(tasks: list[Task], root: Path, spec: IgnoreSpec | None) -> list[Task]:
    """Drop tasks whose root-relative path is ignored by ``spec``."""
    if spec is None or spec.matcher is None:
        return list(tasks)

    kept: list[Task] = []
    for task in tasks:
        if isinstance(task, DirTask):
            is_dir = True
        elif isinstance(task, FileTask):
            is_dir = False
        else:
            raise TypeError(f"unsupported task: {task!r}")
        label = relative_label(task.path, root)
        if spec.matcher.matches(label, is_dir):
            logger.debug("Ignoring task for %s", label)
            continue
        kept.append(task)
    if len(kept) != len(tasks):
        logger.info("Ignored %d task(s) via ignore patterns", len(tasks) - len(kept))
    return kept


__all__ = [
    "is_safe_name",
    "iter_tasks",
    "traverse",
    "relative_label",
    "filter_tasks",
]
