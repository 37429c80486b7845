"""
Gitignore-style pattern sets and the deny/allow selection modes built on them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Tuple, Union

import pathspec

from .errors import ConfigFileError


def _clean(lines: Iterable[str]) -> Tuple[str, ...]:
    return tuple(
        ln.strip()
        for ln in lines
        if ln.strip() and not ln.lstrip().startswith("#")
    )


@dataclass(frozen=True)
class PatternSet:
    """An immutable, ordered list of gitignore rules.

    Later rules win, so ``!pattern`` un-matches anything an earlier rule
    matched. Directory paths are tested with a trailing ``/`` so that
    directory-only rules like ``build/`` apply to them.
    """

    lines: Tuple[str, ...] = ()
    _spec: "pathspec.PathSpec" = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "_spec", pathspec.PathSpec.from_lines("gitwildmatch", self.lines)
        )

    @classmethod
    def empty(cls) -> "PatternSet":
        return cls()

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "PatternSet":
        return cls(_clean(lines))

    @classmethod
    def from_text(cls, text: str) -> "PatternSet":
        return cls.from_lines(text.splitlines())

    def extend(self, lines: Iterable[str]) -> "PatternSet":
        """Return a new set with *lines* appended after the current rules."""
        return PatternSet(self.lines + _clean(lines))

    def __bool__(self) -> bool:
        return bool(self.lines)

    def matches(self, rel_path: str, is_dir: bool = False) -> bool:
        if not self.lines:
            return False
        if is_dir and not rel_path.endswith("/"):
            rel_path += "/"
        return self._spec.match_file(rel_path)


def load_pattern_file(path: Path) -> PatternSet:
    if not path.exists():
        raise ConfigFileError(f"Ignore pattern file '{path}' does not exist")
    if not path.is_file():
        raise ConfigFileError(f"'{path}' is not a file")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigFileError(f"Could not read ignore pattern file '{path}': {e}")
    return PatternSet.from_text(text)


@dataclass(frozen=True)
class Deny:
    """Include everything except what the patterns match."""

    patterns: PatternSet

    label = "IGNORE"

    def includes(self, rel_path: str) -> bool:
        return not self.patterns.matches(rel_path)

    def descends(self, rel_dir: str) -> bool:
        # A matched directory excludes everything below it, so prune it.
        return not self.patterns.matches(rel_dir, is_dir=True)


@dataclass(frozen=True)
class Allow:
    """Include only what the patterns match."""

    patterns: PatternSet

    label = "SKIP not allowed"

    def includes(self, rel_path: str) -> bool:
        return self.patterns.matches(rel_path)

    def descends(self, rel_dir: str) -> bool:
        # An allow rule may match a file deep below an unmatched directory.
        return True


SelectionMode = Union[Deny, Allow]
