"""User-facing error kinds raised by the scaffolding engine.

Structural problems (bad documents, unsafe keys, invalid direct ignore patterns)
raise one of these before anything is written. Per-item filesystem failures
during materialization are logged instead and never surface here.
"""

from __future__ import annotations

import errno
from pathlib import Path


class SkeletorError(Exception):
    """Base error with a short remediation ``tip`` appended to the message."""

    tip = ""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        if not self.tip:
            return self.message
        return f"{self.message}\ntip: {self.tip}"

    @classmethod
    def from_os_error(cls, exc: OSError, path: Path, *, is_dir: bool = False) -> SkeletorError:
        """Map an ``OSError`` raised for ``path`` to the closest error kind.

        ``is_dir`` tells whether the caller expected a directory at ``path``.
        """
        if isinstance(exc, PermissionError) or exc.errno in (errno.EACCES, errno.EPERM):
            return PermissionDeniedError(path)
        if isinstance(exc, FileNotFoundError) or exc.errno == errno.ENOENT:
            return MissingDirectoryError(path) if is_dir else MissingFileError(path)
        if isinstance(exc, NotADirectoryError):
            return MissingDirectoryError(path)
        return SkeletorIOError(path, exc)


class MissingFileError(SkeletorError):
    tip = "Check that the file exists and you have read permissions"

    def __init__(self, path: Path) -> None:
        super().__init__(f"file not found: '{path}'")
        self.path = path


class MissingDirectoryError(SkeletorError):
    tip = "Verify the directory path exists and is accessible"

    def __init__(self, path: Path) -> None:
        super().__init__(f"directory not found: '{path}'")
        self.path = path


class PermissionDeniedError(SkeletorError):
    tip = "Check file/directory permissions or run with appropriate privileges"

    def __init__(self, path: Path) -> None:
        super().__init__(f"permission denied: '{path}'")
        self.path = path


class InvalidYamlError(SkeletorError):
    tip = "Validate the YAML syntax of the configuration file"

    def __init__(self, detail: str, path: Path | None = None) -> None:
        where = f" in '{path}'" if path is not None else ""
        super().__init__(f"invalid YAML configuration{where}: {detail}")
        self.path = path


class MissingConfigKeyError(SkeletorError):
    def __init__(self, key: str) -> None:
        super().__init__(f"missing configuration key: '{key}'")
        self.key = key
        self.tip = f"Ensure your YAML file contains the required '{key}' mapping"


class InvalidIgnorePatternError(SkeletorError):
    tip = "Check glob pattern syntax (e.g. '*.log', 'target/')"

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"invalid ignore pattern: '{pattern}' ({reason})")
        self.pattern = pattern
        self.reason = reason


class InvalidPathError(SkeletorError):
    tip = "Configuration keys must be plain names without '..', drive letters or leading slashes"

    def __init__(self, name: str, parent: Path) -> None:
        super().__init__(f"unsafe path component '{name}' under '{parent}'")
        self.name = name
        self.parent = parent


class SkeletorIOError(SkeletorError):
    def __init__(self, path: Path, exc: OSError) -> None:
        super().__init__(f"I/O error on '{path}': {exc.strerror or exc}")
        self.path = path
        self.__cause__ = exc


__all__ = [
    "SkeletorError",
    "MissingFileError",
    "MissingDirectoryError",
    "PermissionDeniedError",
    "InvalidYamlError",
    "MissingConfigKeyError",
    "InvalidIgnorePatternError",
    "InvalidPathError",
    "SkeletorIOError",
]
