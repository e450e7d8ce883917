"""Reading configuration documents and writing snapshot documents as YAML.

A configuration document carries the scaffold tree under ``directories`` plus
optional context lists and snapshot metadata. Key order is preserved in both
directions so traversal follows the order the author wrote.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .errors import InvalidYamlError, MissingConfigKeyError, MissingFileError, SkeletorError
from .snapshot.metadata import coerce_timestamp

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = ".skeletorrc"


@dataclass(frozen=True)
class ConfigDocument:
    """Parsed configuration document."""

    directories: dict[object, object]
    binary_files: list[str] = field(default_factory=list)
    ignore_patterns: list[str] = field(default_factory=list)
    created: str | None = None
    updated: str | None = None
    generated_comments: str | None = None
    notes: str | None = None
    stats: tuple[int, int] | None = None


class _SnapshotDumper(yaml.SafeDumper):
    """Safe dumper that writes multi-line strings as literal blocks."""


# Plain, quoted and block scalars all fold these breaks when loaded.
_UNICODE_BREAKS = ("\x85", "\u2028", "\u2029")


def _represent_str(dumper: yaml.SafeDumper, value: str) -> yaml.ScalarNode:
    if any(ch in value for ch in _UNICODE_BREAKS):
        return dumper.represent_scalar("tag:yaml.org,2002:str", value, style='"')
    if "\n" in value:
        return dumper.represent_scalar("tag:yaml.org,2002:str", value, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", value)


_SnapshotDumper.add_representer(str, _represent_str)


def default_file_path(value: str | Path | None) -> Path:
    """Return ``value`` as a path, defaulting to ``.skeletorrc``."""
    return Path(value) if value else Path(DEFAULT_CONFIG_NAME)


def _string_list(document: dict[object, object], key: str) -> list[str]:
    value = document.get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _stats(value: object) -> tuple[int, int] | None:
    if not isinstance(value, dict):
        return None
    try:
        return int(value["files"]), int(value["directories"])
    except (KeyError, TypeError, ValueError):
        return None


def read_document_text(path: Path) -> str:
    """Read ``path`` as UTF-8 text with errors mapped to ``SkeletorError``."""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidYamlError(f"not valid UTF-8 ({exc.reason})", path) from exc
    except OSError as exc:
        raise SkeletorError.from_os_error(exc, path) from exc


def parse_yaml(text: str, path: Path | None = None) -> object:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise InvalidYamlError(str(exc), path) from exc


def parse_config_document(
    text: str,
    path: Path | None = None,
    *,
    require_directories: bool = True,
) -> ConfigDocument:
    """Parse a configuration document from YAML ``text``.

    Raises ``InvalidYamlError`` on syntax errors and ``MissingConfigKeyError``
    when ``directories`` is absent or not a mapping. With
    ``require_directories`` off, only the metadata is required to parse.
    """
    document = parse_yaml(text, path)
    if document is None and not require_directories:
        document = {}
    if not isinstance(document, dict):
        if require_directories:
            raise MissingConfigKeyError("directories")
        raise InvalidYamlError("top-level value is not a mapping", path)
    directories = document.get("directories")
    if not isinstance(directories, dict):
        if require_directories:
            raise MissingConfigKeyError("directories")
        directories = {}

    created = coerce_timestamp(document.get("created"))
    updated = coerce_timestamp(document.get("updated"))
    comments = document.get("generated_comments")
    notes = document.get("notes")
    return ConfigDocument(
        directories=directories,
        binary_files=_string_list(document, "binary_files"),
        ignore_patterns=_string_list(document, "ignore_patterns"),
        created=created,
        updated=updated,
        generated_comments=comments if isinstance(comments, str) else None,
        notes=notes if isinstance(notes, str) else None,
        stats=_stats(document.get("stats")),
    )


def load_config_document(path: Path, *, require_directories: bool = True) -> ConfigDocument:
    """Load and parse the configuration document at ``path``."""
    logger.info("Reading input file: %s", path)
    if path.is_dir():
        raise MissingFileError(path)
    return parse_config_document(
        read_document_text(path),
        path,
        require_directories=require_directories,
    )


def dump_document(document: dict[str, object]) -> str:
    """Serialize a document to YAML preserving key order."""
    return yaml.dump(
        document,
        Dumper=_SnapshotDumper,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=4096,
    )


def write_document(path: Path, document: dict[str, object]) -> None:
    """Write ``document`` to ``path``, creating parent directories as needed."""
    text = dump_document(document)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise SkeletorError.from_os_error(exc, path) from exc
    logger.info("Wrote snapshot document %s", path)


__all__ = [
    "DEFAULT_CONFIG_NAME",
    "ConfigDocument",
    "default_file_path",
    "read_document_text",
    "parse_yaml",
    "parse_config_document",
    "load_config_document",
    "dump_document",
    "write_document",
]
