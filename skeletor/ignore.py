"""Gitignore-style path filtering shared by apply and snapshot.

Patterns are compiled once per invocation into an ``IgnoreMatcher``. Matching
runs against ``/``-separated paths relative to the declared root, and a path is
ignored when it or any ancestor directory is ignored. Later patterns override
earlier ones, so ``!pattern`` can re-include a path.

Patterns typed directly by the caller must compile; patterns read from a file
(for example a project's ``.gitignore``) are dropped with a warning instead.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path, PurePath

from .errors import InvalidIgnorePatternError, MissingFileError, SkeletorError

logger = logging.getLogger(__name__)


class PatternSyntaxError(ValueError):
    """Raised when one gitignore pattern cannot be compiled."""


@dataclass(frozen=True)
class PatternSource:
    """One ignore input: a literal pattern or a pattern file.

    ``origin`` marks a literal that was itself read from a file (e.g. a user
    defaults file) and therefore gets the lenient file policy.
    """

    text: str
    is_file: bool = False
    origin: Path | None = None

    @classmethod
    def literal(cls, pattern: str) -> PatternSource:
        return cls(pattern)

    @classmethod
    def file(cls, path: Path | str) -> PatternSource:
        return cls(str(path), is_file=True)

    @property
    def lenient(self) -> bool:
        return self.is_file or self.origin is not None


@dataclass(frozen=True)
class IgnoreRule:
    """Compiled form of one pattern line."""

    pattern: str
    regex: re.Pattern[str]
    negated: bool
    dir_only: bool

    def hits(self, path: str, is_dir: bool) -> bool:
        if self.dir_only and not is_dir:
            return False
        return self.regex.match(path) is not None


def _translate_class(segment: str, start: int) -> tuple[str, int]:
    """Translate a ``[...]`` class beginning at ``segment[start]``.

    Returns ``(regex, index_after_class)``.
    """
    idx = start + 1
    negate = False
    if idx < len(segment) and segment[idx] in "!^":
        negate = True
        idx += 1

    items: list[str] = []
    first = True
    while True:
        if idx >= len(segment):
            raise PatternSyntaxError("unclosed character class")
        ch = segment[idx]
        if ch == "]" and not first:
            idx += 1
            break
        first = False
        if ch == "\\":
            idx += 1
            if idx >= len(segment):
                raise PatternSyntaxError("dangling escape in character class")
            ch = segment[idx]
        if idx + 2 < len(segment) and segment[idx + 1] == "-" and segment[idx + 2] != "]":
            end = segment[idx + 2]
            if end == "\\":
                if idx + 3 >= len(segment):
                    raise PatternSyntaxError("dangling escape in character class")
                end = segment[idx + 3]
                idx += 1
            if ord(end) < ord(ch):
                raise PatternSyntaxError(f"invalid range '{ch}-{end}'")
            items.append(f"{re.escape(ch)}-{re.escape(end)}")
            idx += 3
            continue
        items.append(re.escape(ch))
        idx += 1

    body = "".join(items)
    if negate:
        return f"[^/{body}]", idx
    return f"[{body}]", idx


def _translate_segment(segment: str) -> str:
    """Translate one ``/``-free glob segment to a regular expression."""
    out: list[str] = []
    idx = 0
    while idx < len(segment):
        ch = segment[idx]
        if ch == "\\":
            if idx + 1 >= len(segment):
                raise PatternSyntaxError("trailing backslash")
            out.append(re.escape(segment[idx + 1]))
            idx += 2
        elif ch == "*":
            while idx < len(segment) and segment[idx] == "*":
                idx += 1
            out.append("[^/]*")
        elif ch == "?":
            out.append("[^/]")
            idx += 1
        elif ch == "[":
            translated, idx = _translate_class(segment, idx)
            out.append(translated)
        else:
            out.append(re.escape(ch))
            idx += 1
    return "".join(out)


def compile_rule(pattern: str) -> IgnoreRule:
    """Compile one trimmed gitignore pattern.

    Raises ``PatternSyntaxError`` when the pattern cannot be compiled.
    """
    body = pattern
    negated = body.startswith("!")
    if negated:
        body = body[1:]
    if not body:
        raise PatternSyntaxError("negation without a pattern")

    dir_only = False
    while body.endswith("/") and not body.endswith("\\/"):
        dir_only = True
        body = body[:-1]

    anchored = "/" in body
    body = body.lstrip("/")
    parts = [part for part in body.split("/") if part]
    if not parts:
        raise PatternSyntaxError("pattern matches nothing")

    out: list[str] = []
    for idx, part in enumerate(parts):
        is_last = idx == len(parts) - 1
        if part == "**":
            if is_last:
                out.append(".+" if idx > 0 else ".*")
            else:
                out.append("(?:.*/)?")
            continue
        out.append(_translate_segment(part))
        if not is_last:
            out.append("/")

    prefix = "^" if anchored else "^(?:.*/)?"
    try:
        regex = re.compile(prefix + "".join(out) + "$", re.DOTALL)
    except re.error as exc:
        raise PatternSyntaxError(str(exc)) from exc
    return IgnoreRule(pattern=pattern, regex=regex, negated=negated, dir_only=dir_only)


def normalize_relative_path(path: str | PurePath) -> tuple[str, bool]:
    """Return ``(posix_path, has_trailing_slash)`` for matcher input."""
    if isinstance(path, PurePath):
        text = path.as_posix()
        trailing = False
    else:
        text = path if os.sep == "/" else path.replace(os.sep, "/")
        trailing = text.endswith("/")
    while text.startswith("./"):
        text = text[2:]
    text = text.strip("/")
    if text == ".":
        text = ""
    return text, trailing


@dataclass(frozen=True)
class IgnoreMatcher:
    """Ordered gitignore rules evaluated with last-match-wins semantics."""

    rules: tuple[IgnoreRule, ...]

    def _decide(self, path: str, is_dir: bool) -> bool | None:
        decision: bool | None = None
        for rule in self.rules:
            if rule.hits(path, is_dir):
                decision = not rule.negated
        return decision

    def matches(self, path: str | PurePath, is_dir: bool = False) -> bool:
        """Return whether ``path`` or any of its ancestor directories is ignored."""
        normalized, trailing = normalize_relative_path(path)
        if not normalized:
            return False
        is_dir = is_dir or trailing

        parts = normalized.split("/")
        for depth in range(1, len(parts)):
            if self._decide("/".join(parts[:depth]), True):
                return True
        return bool(self._decide(normalized, is_dir))


@dataclass(frozen=True)
class IgnoreSpec:
    """Accepted pattern strings, their compiled matcher, and dropped-pattern warnings."""

    patterns: tuple[str, ...] = ()
    matcher: IgnoreMatcher | None = None
    warnings: tuple[str, ...] = ()

    def matches(self, path: str | PurePath, is_dir: bool = False) -> bool:
        if self.matcher is None:
            return False
        return self.matcher.matches(path, is_dir)


def _pattern_lines(text: str) -> Iterable[str]:
    for line in text.splitlines():
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        yield trimmed


def _read_pattern_file(path: Path) -> str:
    if not path.is_file():
        raise MissingFileError(path)
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise SkeletorError.from_os_error(exc, path) from exc


def compile_ignore_spec(sources: Iterable[PatternSource]) -> IgnoreSpec:
    """Compile ``sources`` in order into one ``IgnoreSpec``.

    Directly supplied patterns that fail to compile raise
    ``InvalidIgnorePatternError``. Failing patterns read from files are logged,
    recorded in ``warnings``, and skipped.
    """
    patterns: list[str] = []
    rules: list[IgnoreRule] = []
    warnings: list[str] = []

    def add(line: str, origin: Path | None) -> None:
        try:
            rule = compile_rule(line)
        except PatternSyntaxError as exc:
            if origin is None:
                raise InvalidIgnorePatternError(line, str(exc)) from exc
            message = f"Skipping invalid ignore pattern '{line}' from {origin}: {exc}"
            logger.warning(message)
            warnings.append(message)
            return
        patterns.append(line)
        rules.append(rule)

    for source in sources:
        if source.is_file:
            path = Path(source.text)
            for line in _pattern_lines(_read_pattern_file(path)):
                add(line, path)
            continue
        trimmed = source.text.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        add(trimmed, source.origin)

    for pattern in patterns:
        logger.debug("Added ignore pattern: %s", pattern)
    return IgnoreSpec(
        patterns=tuple(patterns),
        matcher=IgnoreMatcher(tuple(rules)) if rules else None,
        warnings=tuple(warnings),
    )


def collect_ignore_sources(
    values: Iterable[str] = (),
    files: Iterable[str | Path] = (),
) -> list[PatternSource]:
    """Classify CLI ignore arguments into pattern sources.

    A ``values`` entry naming an existing file is read as a pattern file;
    anything else is a literal pattern. Every ``files`` entry must exist.
    """
    sources: list[PatternSource] = []
    for value in values:
        candidate = Path(value)
        if candidate.is_file():
            sources.append(PatternSource.file(candidate))
        else:
            sources.append(PatternSource.literal(value))
    for raw_path in files:
        path = Path(raw_path)
        if not path.is_file():
            raise MissingFileError(path)
        sources.append(PatternSource.file(path))
    return sources


__all__ = [
    "PatternSyntaxError",
    "PatternSource",
    "IgnoreRule",
    "IgnoreMatcher",
    "IgnoreSpec",
    "compile_rule",
    "normalize_relative_path",
    "compile_ignore_spec",
    "collect_ignore_sources",
]
