"""Command flows wiring the engine to user config and the reporter."""

from __future__ import annotations

from .apply import ApplyOptions, ApplyReport, apply_config, apply_ignore_sources, plan_tasks, run_apply
from .info import run_info
from .snapshot import (
    SnapshotOptions,
    SnapshotPlan,
    run_snapshot,
    snapshot_ignore_sources,
    snapshot_to_tasks,
    take_snapshot,
)

__all__ = [
    "ApplyOptions",
    "ApplyReport",
    "apply_config",
    "apply_ignore_sources",
    "plan_tasks",
    "run_apply",
    "run_info",
    "SnapshotOptions",
    "SnapshotPlan",
    "run_snapshot",
    "snapshot_ignore_sources",
    "snapshot_to_tasks",
    "take_snapshot",
]
