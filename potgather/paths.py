"""Path normalisation and exclusion matching."""

from __future__ import annotations

import fnmatch
import os
import posixpath
import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from .logging import get_logger

LOGGER = get_logger(__name__)

WILDCARD_CHARS = frozenset("*?[")


def normalize_path(path: str) -> str:
    """Return a forward-slashed, collapsed relative path."""
    text = path.replace("\\", "/")
    if not text:
        return text
    return posixpath.normpath(text)


def display_path(path: str) -> str:
    """Return path with undecodable bytes replaced, safe for UTF-8 output."""
    try:
        raw = path.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        # Lone surrogates that do not stand for an escaped byte.
        raw = path.encode("utf-8", "surrogatepass")
    return raw.decode("utf-8", "replace")


def has_wildcards(pattern: str) -> bool:
    """Return True if the pattern contains glob metacharacters."""
    return any(char in WILDCARD_CHARS for char in pattern)


@dataclass(frozen=True, slots=True)
class PathPattern:
    """Single exclusion rule: either a glob or an exact path denoting a subtree.

    Glob dialect: ``*`` matches any run of characters including ``/``, ``?``
    matches exactly one character and ``[seq]`` / ``[!seq]`` are character
    classes. Case sensitivity follows :func:`os.path.normcase`. Patterns and
    candidates are both normalised with :func:`normalize_path`.
    """

    pattern: str
    is_wildcard: bool
    _regex: re.Pattern[str] | None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_string(cls, raw: str) -> "PathPattern":
        # Same normalisation as collected paths, so "./src/gen" and "src/gen/" name one subtree.
        text = normalize_path(raw)
        if has_wildcards(text):
            try:
                regex = re.compile(fnmatch.translate(os.path.normcase(text)))
            except re.error as exc:
                LOGGER.warning("Invalid wildcard pattern '%s' (%s); matching it literally", raw, exc)
            else:
                return cls(pattern=text, is_wildcard=True, _regex=regex)
        return cls(pattern=text, is_wildcard=False)

    def matches(self, path: str) -> bool:
        candidate = normalize_path(path)
        if self._regex is not None:
            return self._regex.match(os.path.normcase(candidate)) is not None
        return candidate == self.pattern or candidate.startswith(self.pattern + "/")


@dataclass(frozen=True, slots=True)
class ExclusionSet:
    """Ordered, immutable collection of exclusion patterns."""

    patterns: tuple[PathPattern, ...] = ()

    @classmethod
    def from_strings(cls, raw_patterns: Iterable[str]) -> "ExclusionSet":
        return cls(tuple(PathPattern.from_string(raw) for raw in raw_patterns if raw))

    def is_excluded(self, path: str) -> bool:
        return any(pattern.matches(path) for pattern in self.patterns)

    def __iter__(self) -> Iterator[PathPattern]:
        return iter(self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)

    def __bool__(self) -> bool:
        return bool(self.patterns)


__all__ = ["ExclusionSet", "PathPattern", "WILDCARD_CHARS", "display_path", "has_wildcards", "normalize_path"]
