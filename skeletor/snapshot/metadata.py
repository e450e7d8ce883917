"""Snapshot document metadata with ``created`` preserved across runs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)


def format_rfc3339(moment: datetime) -> str:
    """Format ``moment`` as an RFC 3339 UTC timestamp with a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc).replace(microsecond=0)
    return moment.isoformat().replace("+00:00", "Z")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def coerce_timestamp(value: object) -> str | None:
    """Normalize a ``created`` value loaded from YAML.

    Unquoted timestamps load as ``datetime``; those are re-rendered.
    """
    if isinstance(value, str) and value.strip():
        return value
    if isinstance(value, datetime):
        return format_rfc3339(value)
    if isinstance(value, date):
        return value.isoformat()
    return None


def read_previous_created(output_path: Path | None) -> str | None:
    """Return ``created`` from a prior snapshot at ``output_path`` if readable."""
    if output_path is None or not output_path.is_file():
        return None
    try:
        document = yaml.safe_load(output_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        logger.warning("Could not read previous snapshot %s: %s", output_path, exc)
        return None
    if not isinstance(document, dict):
        return None
    return coerce_timestamp(document.get("created"))


def build_metadata(existing_output_path: Path | None, now: datetime) -> tuple[str, str]:
    """Return ``(created, updated)`` timestamps for a snapshot written now.

    ``updated`` is always ``now``. ``created`` is copied from a parseable
    previous snapshot at ``existing_output_path`` and is ``now`` otherwise.
    """
    updated = format_rfc3339(now)
    created = read_previous_created(existing_output_path)
    if created is None:
        created = updated
    else:
        logger.info("Preserving created timestamp %s from %s", created, existing_output_path)
    return created, updated


def generated_comments(source: Path, binary_files: list[str]) -> str:
    """Return the generated comment block describing a snapshot run."""
    lines = [f"Snapshot generated from folder: {source}"]
    if binary_files:
        lines.append(f"Binary files detected (contents omitted): {', '.join(binary_files)}")
    else:
        lines.append("No binary files detected.")
    return "\n".join(lines)


@dataclass(frozen=True)
class SnapshotMetadata:
    """Header fields written above the snapshot ``directories`` tree."""

    created: str
    updated: str
    generated_comments: str
    file_count: int
    dir_count: int
    notes: str | None = None

    def as_document(self) -> dict[str, object]:
        document: dict[str, object] = {
            "created": self.created,
            "updated": self.updated,
            "generated_comments": self.generated_comments,
        }
        if self.notes is not None:
            document["notes"] = self.notes
        document["stats"] = {"files": self.file_count, "directories": self.dir_count}
        return document


def build_snapshot_document(
    metadata: SnapshotMetadata,
    tree: dict[str, object],
    binary_files: list[str] | None = None,
    ignore_patterns: list[str] | tuple[str, ...] | None = None,
) -> dict[str, object]:
    """Assemble the full snapshot document in its written key order."""
    document = metadata.as_document()
    if binary_files:
        document["binary_files"] = list(binary_files)
    if ignore_patterns:
        document["ignore_patterns"] = list(ignore_patterns)
    document["directories"] = tree
    return document


__all__ = [
    "format_rfc3339",
    "utc_now",
    "coerce_timestamp",
    "read_previous_created",
    "build_metadata",
    "generated_comments",
    "SnapshotMetadata",
    "build_snapshot_document",
]
