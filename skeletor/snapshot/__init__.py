"""Directory-to-configuration snapshot capture.

This package contains the snapshot direction of the engine:
- sorted, ignore-aware directory scanning with binary detection
- file/directory statistics over configuration-shaped trees
- metadata that keeps ``created`` stable across repeated snapshots
"""

from __future__ import annotations

from .fs import (
    DirectoryChild,
    SnapshotTree,
    build_snapshot_tree,
    compute_stats,
    list_directory_children,
    read_file_content,
)
from .metadata import (
    SnapshotMetadata,
    build_metadata,
    build_snapshot_document,
    format_rfc3339,
    generated_comments,
    coerce_timestamp,
    read_previous_created,
    utc_now,
)

__all__ = [
    "DirectoryChild",
    "SnapshotTree",
    "list_directory_children",
    "read_file_content",
    "build_snapshot_tree",
    "compute_stats",
    "SnapshotMetadata",
    "build_metadata",
    "build_snapshot_document",
    "format_rfc3339",
    "generated_comments",
    "coerce_timestamp",
    "read_previous_created",
    "utc_now",
]
