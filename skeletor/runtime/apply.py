"""The apply flow: configuration document to files and directories.

Every structural check (document shape, unsafe keys, direct ignore patterns)
runs before the first filesystem change.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from ..config_tree import CreationResult, Task, filter_tasks, materialize, traverse
from ..documents import ConfigDocument, load_config_document
from ..ignore import IgnoreSpec, PatternSource, collect_ignore_sources, compile_ignore_spec
from ..report import Reporter
from .config import load_default_ignore_sources

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApplyOptions:
    """Per-run apply settings collected from the command line."""

    config_path: Path
    output_dir: Path = Path(".")
    overwrite: bool = False
    dry_run: bool = False
    verbose: bool = False
    ignore_values: tuple[str, ...] = ()
    ignore_files: tuple[str, ...] = ()


@dataclass
class ApplyReport:
    """Outcome of one apply: the tasks considered and, unless dry, the result."""

    tasks: list[Task]
    result: CreationResult | None
    duration: float
    ignore_spec: IgnoreSpec = field(default_factory=IgnoreSpec)

    @property
    def tasks_total(self) -> int:
        return len(self.tasks)


def plan_tasks(tree: Mapping[object, object], target_dir: Path, ignore: IgnoreSpec | None = None) -> list[Task]:
    """Traverse ``tree`` under ``target_dir`` and drop ignored tasks."""
    tasks = traverse(target_dir, tree)
    return filter_tasks(tasks, target_dir, ignore)


def apply_config(
    document: ConfigDocument,
    target_dir: Path,
    overwrite: bool = False,
    dry_run: bool = False,
    ignore: IgnoreSpec | None = None,
) -> ApplyReport:
    """Apply ``document`` beneath ``target_dir``.

    With ``dry_run`` the task list is computed and returned without touching
    the filesystem.
    """
    start = time.monotonic()
    tasks = plan_tasks(document.directories, target_dir, ignore)
    result = None if dry_run else materialize(tasks, overwrite, root=target_dir)
    return ApplyReport(
        tasks=tasks,
        result=result,
        duration=time.monotonic() - start,
        ignore_spec=ignore if ignore is not None else IgnoreSpec(),
    )


def apply_ignore_sources(document: ConfigDocument, options: ApplyOptions) -> list[PatternSource]:
    """Return ignore sources in precedence order, lowest first.

    User defaults come first, then the document's own patterns, then the
    command line, so later sources can re-include earlier matches.
    """
    sources = load_default_ignore_sources()
    sources.extend(PatternSource.literal(pattern) for pattern in document.ignore_patterns)
    sources.extend(collect_ignore_sources(options.ignore_values, options.ignore_files))
    return sources


def run_apply(options: ApplyOptions, reporter: Reporter) -> ApplyReport:
    """Run the apply subcommand and report its outcome."""
    logger.info("Overwrite flag: %s", options.overwrite)
    document = load_config_document(options.config_path)
    logger.info("Extracted %d binary files: %s", len(document.binary_files), document.binary_files)

    spec = compile_ignore_spec(apply_ignore_sources(document, options))
    if spec.warnings:
        reporter.tip("check ignore pattern syntax or escape special characters")

    if options.dry_run:
        report = apply_config(document, options.output_dir, dry_run=True, ignore=spec)
        reporter.dry_run_preview(
            report.tasks,
            verbose=options.verbose,
            binary_files=document.binary_files,
            ignore_patterns=spec.patterns,
            verb="applied",
            root=options.output_dir,
        )
        return report

    reporter.operation_start("apply", f"creating tree in {options.output_dir}")
    report = apply_config(document, options.output_dir, options.overwrite, ignore=spec)
    reporter.apply_complete(
        report.result,
        tasks_total=report.tasks_total,
        duration=report.duration,
        verbose=options.verbose,
    )
    if document.binary_files:
        reporter.warning(f"{len(document.binary_files)} binary files in this configuration were not restored")
    return report


__all__ = [
    "ApplyOptions",
    "ApplyReport",
    "plan_tasks",
    "apply_config",
    "apply_ignore_sources",
    "run_apply",
]
