"""
Build the run configuration once from the command-line options.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from .console import Console
from .errors import ConfigFileError
from .patterns import Allow, Deny, PatternSet, SelectionMode, load_pattern_file
from .sink import CLIPBOARD, Destination

DEFAULT_FALLBACK_NAME = "codemerger-output.md"


@dataclass(frozen=True)
class MergeConfig:
    root: Path
    selection: SelectionMode
    destination: Destination
    fallback_path: Path

    @property
    def to_clipboard(self) -> bool:
        return self.destination == CLIPBOARD


def _deny_patterns(
    ignore_file: Optional[Path],
    inline_ignore: Sequence[str],
    console: Console,
) -> PatternSet:
    patterns = PatternSet.empty()
    if ignore_file is not None:
        try:
            patterns = load_pattern_file(Path(ignore_file).resolve())
        except ConfigFileError as e:
            console.error(f"Error reading ignore pattern file: {e}")
    if inline_ignore:
        patterns = patterns.extend(inline_ignore)
    return patterns


def build_config(
    folder: Path,
    output: Optional[Path] = None,
    ignore_file: Optional[Path] = None,
    inline_ignore: Optional[Sequence[str]] = None,
    allow: Optional[Sequence[str]] = None,
    verbose: bool = False,
    clipboard: bool = False,
    console: Optional[Console] = None,
) -> MergeConfig:
    """Resolve paths and pick the selection mode.

    An allow list switches to allow mode and supersedes any ignore file or
    inline ignore patterns; that combination only produces a warning.
    """
    console = console or Console(verbose=verbose)
    inline_ignore = list(inline_ignore or [])
    allow = list(allow or [])

    root = Path(folder).resolve()
    out_path = Path(output).resolve() if output is not None else None
    destination: Destination = CLIPBOARD if clipboard or out_path is None else out_path
    fallback_path = out_path or Path.cwd() / DEFAULT_FALLBACK_NAME

    selection: SelectionMode
    if allow:
        selection = Allow(PatternSet.from_lines(allow))
        if ignore_file is not None or inline_ignore:
            console.warning(
                "[WARNING] --allow cannot be combined with --ignore / --inline-ignore. "
                "Allow patterns take precedence; ignore patterns are ignored."
            )
    else:
        selection = Deny(_deny_patterns(ignore_file, inline_ignore, console))

    if verbose:
        console.detail(f"Target folder: {root}")
        console.detail(f"Output target: {destination}")
        if allow:
            console.detail(f"Allow patterns: {', '.join(allow)}")
        else:
            if ignore_file is not None:
                console.detail(f"Ignore pattern file: {ignore_file}")
            if inline_ignore:
                console.detail(f"Inline ignore patterns: {', '.join(inline_ignore)}")
        console.blank()

    return MergeConfig(
        root=root,
        selection=selection,
        destination=destination,
        fallback_path=fallback_path,
    )
