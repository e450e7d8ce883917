"""Filesystem scanning into a configuration-shaped snapshot tree."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import MissingDirectoryError, SkeletorError
from ..ignore import IgnoreMatcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectoryChild:
    """One directory entry that survived ignore filtering."""

    name: str
    path: Path
    relative: str
    is_dir: bool


@dataclass
class SnapshotTree:
    """Snapshot mapping plus root-relative paths of files detected as binary."""

    tree: dict[str, object] = field(default_factory=dict)
    binary_files: list[str] = field(default_factory=list)


def _child_relative(parent_relative: str, name: str) -> str:
    return f"{parent_relative}/{name}" if parent_relative else name


def list_directory_children(
    directory: Path,
    relative: str,
    ignore_matcher: IgnoreMatcher | None = None,
    exclude: frozenset[Path] = frozenset(),
) -> list[DirectoryChild]:
    """List regular files and directories in ``directory`` sorted by name.

    Symbolic links and special files are left out. Ignored entries and
    ``exclude`` paths are dropped before the caller sees them.
    """
    children: list[DirectoryChild] = []
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                child_path = Path(entry.path)
                try:
                    if entry.is_symlink():
                        logger.debug("Skipping symlink %s", child_path)
                        continue
                    is_dir = entry.is_dir(follow_symlinks=False)
                    is_file = entry.is_file(follow_symlinks=False)
                except OSError as exc:
                    logger.warning("Skipping unreadable entry %s: %s", child_path, exc)
                    continue
                if not is_dir and not is_file:
                    continue

                child_relative = _child_relative(relative, entry.name)
                if ignore_matcher is not None and ignore_matcher.matches(
                    child_relative + "/" if is_dir else child_relative,
                    is_dir,
                ):
                    logger.debug("Ignoring %s", child_relative)
                    continue
                if exclude and child_path.resolve() in exclude:
                    logger.debug("Excluding snapshot output %s", child_relative)
                    continue

                children.append(
                    DirectoryChild(
                        name=entry.name,
                        path=child_path,
                        relative=child_relative,
                        is_dir=is_dir,
                    )
                )
    except OSError as exc:
        raise SkeletorError.from_os_error(exc, directory, is_dir=True) from exc

    children.sort(key=lambda item: item.name)
    return children


def read_file_content(path: Path) -> str | None:
    """Return the UTF-8 text of ``path`` or ``None`` when it is binary."""
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise SkeletorError.from_os_error(exc, path) from exc
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None


def build_snapshot_tree(
    root: Path,
    include_contents: bool,
    ignore_matcher: IgnoreMatcher | None = None,
    exclude: frozenset[Path] = frozenset(),
) -> SnapshotTree:
    """Capture ``root`` as a nested mapping of names to contents.

    Directories become mappings, files become strings. Without
    ``include_contents`` every file is an empty string and no bytes are read.
    Files that do not decode as UTF-8 are stored as empty strings and listed
    in ``binary_files``.
    """
    root = Path(root)
    if not root.is_dir():
        raise MissingDirectoryError(root)

    result = SnapshotTree()
    stack: list[tuple[Path, str, dict[str, object]]] = [(root, "", result.tree)]
    while stack:
        directory, relative, mapping = stack.pop()
        subdirectories: list[tuple[Path, str, dict[str, object]]] = []
        for child in list_directory_children(directory, relative, ignore_matcher, exclude):
            if child.is_dir:
                nested: dict[str, object] = {}
                mapping[child.name] = nested
                subdirectories.append((child.path, child.relative, nested))
                continue

            if not include_contents:
                mapping[child.name] = ""
                continue
            content = read_file_content(child.path)
            if content is None:
                logger.info("Binary file detected, contents omitted: %s", child.relative)
                result.binary_files.append(child.relative)
                content = ""
            mapping[child.name] = content
        stack.extend(reversed(subdirectories))
    return result


def compute_stats(tree: Mapping[object, object]) -> tuple[int, int]:
    """Return ``(file_count, dir_count)`` for a configuration-shaped tree.

    Nested mappings count as directories and string leaves as files; the root
    mapping itself is not counted. Other values are ignored, matching what
    traversal turns into tasks.
    """
    files = 0
    dirs = 0
    stack: list[Mapping[object, object]] = [tree]
    while stack:
        node = stack.pop()
        for key, value in node.items():
            if not isinstance(key, str):
                continue
            if isinstance(value, Mapping):
                dirs += 1
                stack.append(value)
            elif isinstance(value, str):
                files += 1
    return files, dirs


__all__ = [
    "DirectoryChild",
    "SnapshotTree",
    "list_directory_children",
    "read_file_content",
    "build_snapshot_tree",
    "compute_stats",
]
