"""The snapshot flow: existing directory to configuration document."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from ..config_tree import Task, iter_tasks
from ..documents import DEFAULT_CONFIG_NAME, dump_document, write_document
from ..errors import MissingDirectoryError
from ..ignore import IgnoreSpec, PatternSource, collect_ignore_sources, compile_ignore_spec
from ..report import Reporter
from ..snapshot import (
    SnapshotMetadata,
    build_metadata,
    build_snapshot_document,
    build_snapshot_tree,
    compute_stats,
    format_rfc3339,
    generated_comments,
    utc_now,
)
from .config import load_default_ignore_sources

logger = logging.getLogger(__name__)

GITIGNORE_NAME = ".gitignore"


@dataclass(frozen=True)
class SnapshotOptions:
    source: Path
    output_path: Path = Path(DEFAULT_CONFIG_NAME)
    include_contents: bool = True
    dry_run: bool = False
    verbose: bool = False
    note: str | None = None
    to_stdout: bool = False
    ignore_values: tuple[str, ...] = ()
    ignore_files: tuple[str, ...] = ()
    use_gitignore: bool = False


@dataclass
class SnapshotPlan:
    """Captured tree, its document, and counts, before anything is written."""

    document: dict[str, object]
    tree: dict[str, object]
    binary_files: list[str]
    files: int
    dirs: int
    duration: float
    ignore_spec: IgnoreSpec = field(default_factory=IgnoreSpec)


def snapshot_ignore_sources(options: SnapshotOptions) -> list[PatternSource]:
    """Return ignore sources for a snapshot run, lowest precedence first."""
    sources = load_default_ignore_sources()
    if options.use_gitignore:
        gitignore = options.source / GITIGNORE_NAME
        if gitignore.is_file():
            sources.append(PatternSource.file(gitignore))
        else:
            logger.info("No %s found in %s", GITIGNORE_NAME, options.source)
    sources.extend(collect_ignore_sources(options.ignore_values, options.ignore_files))
    return sources


def _output_exclusions(options: SnapshotOptions) -> frozenset[Path]:
    # Never capture the document being written by this run.
    if options.to_stdout:
        return frozenset()
    return frozenset({options.output_path.resolve()})


def take_snapshot(
    options: SnapshotOptions,
    now: datetime | None = None,
    ignore: IgnoreSpec | None = None,
) -> SnapshotPlan:
    """Scan ``options.source`` and assemble its snapshot document.

    Nothing is written. ``ignore`` defaults to the ``IgnoreSpec`` compiled from
    ``snapshot_ignore_sources``.
    """
    if not options.source.is_dir():
        raise MissingDirectoryError(options.source)
    if ignore is None:
        ignore = compile_ignore_spec(snapshot_ignore_sources(options))

    start = time.monotonic()
    logger.info("Scanning %s", options.source)
    captured = build_snapshot_tree(
        options.source,
        options.include_contents,
        ignore.matcher,
        _output_exclusions(options),
    )
    files, dirs = compute_stats(captured.tree)

    moment = now if now is not None else utc_now()
    if options.to_stdout:
        created = updated = format_rfc3339(moment)
    else:
        created, updated = build_metadata(options.output_path, moment)
    metadata = SnapshotMetadata(
        created=created,
        updated=updated,
        generated_comments=generated_comments(options.source, captured.binary_files),
        file_count=files,
        dir_count=dirs,
        notes=options.note,
    )
    document = build_snapshot_document(
        metadata,
        captured.tree,
        binary_files=captured.binary_files,
        ignore_patterns=ignore.patterns,
    )
    return SnapshotPlan(
        document=document,
        tree=captured.tree,
        binary_files=captured.binary_files,
        files=files,
        dirs=dirs,
        duration=time.monotonic() - start,
        ignore_spec=ignore,
    )


def snapshot_to_tasks(tree: dict[str, object]) -> list[Task]:
    """Express a captured tree as the tasks applying it would run.

    Names read from disk are listed even when applying them would be refused.
    """
    return list(iter_tasks(Path("."), tree, validate=False))


def run_snapshot(options: SnapshotOptions, reporter: Reporter) -> SnapshotPlan:
    """Run the snapshot subcommand and report its outcome."""
    ignore = compile_ignore_spec(snapshot_ignore_sources(options))
    if ignore.warnings and not options.to_stdout:
        reporter.tip("check ignore pattern syntax or escape special characters")

    plan = take_snapshot(options, ignore=ignore)

    if options.dry_run:
        reporter.dry_run_preview(
            snapshot_to_tasks(plan.tree),
            verbose=options.verbose,
            binary_files=plan.binary_files,
            ignore_patterns=ignore.patterns,
            verb="captured",
            root=Path("."),
        )
        return plan

    if options.to_stdout:
        reporter.yaml(dump_document(plan.document))
        return plan

    write_document(options.output_path, plan.document)
    reporter.snapshot_complete(
        files=plan.files,
        dirs=plan.dirs,
        duration=plan.duration,
        output_path=options.output_path,
        binary_files=plan.binary_files,
        verbose=options.verbose,
    )
    return plan


__all__ = [
    "GITIGNORE_NAME",
    "SnapshotOptions",
    "SnapshotPlan",
    "snapshot_ignore_sources",
    "take_snapshot",
    "snapshot_to_tasks",
    "run_snapshot",
]
