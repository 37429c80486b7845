"""
Core logic for codemerger: walk, select, fence and assemble.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Callable, List, NamedTuple, Optional

from colorama import Fore

from .classify import is_text
from .errors import InvalidRootError, WalkError
from .patterns import SelectionMode
from .sink import Delivery, deliver

if TYPE_CHECKING:
    from .config import MergeConfig
    from .console import Console

DEFAULT_FENCE = "```"
_BACKTICK_RUN = re.compile(r"`+")


class FileEntry(NamedTuple):
    display_path: str
    abs_path: Path


@dataclass(frozen=True)
class ReadResult:
    """File content, or the reason it could not be read."""

    content: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class MergeResult:
    document: str
    entries: List[FileEntry]
    delivery: Delivery


def choose_fence(content: str) -> str:
    """Return a backtick fence longer than any backtick run in *content*."""
    if not content:
        return DEFAULT_FENCE
    longest = max((len(m) for m in _BACKTICK_RUN.findall(content)), default=0)
    return "`" * max(3, longest + 1)


def _sort_key(entry: FileEntry):
    # Case-insensitive first, then exact, so the order is stable across locales.
    return (entry.display_path.casefold(), entry.display_path)


def walk(
    root: Path,
    selection: SelectionMode,
    classifier: Callable[[Path], bool] = is_text,
    console: Optional["Console"] = None,
) -> List[FileEntry]:
    """Collect the text files under *root* that *selection* includes.

    Directories are visited depth-first. Symbolic links are never followed,
    so the walk cannot loop. A directory that cannot be listed aborts the
    whole walk with :class:`WalkError`.
    """
    root = Path(root)
    if not root.exists():
        raise InvalidRootError(f"Source folder '{root}' does not exist")
    if not root.is_dir():
        raise InvalidRootError(f"Source path '{root}' is not a directory")

    def _detail(msg: str, color: str = Fore.GREEN) -> None:
        if console is not None:
            console.detail(msg, color)

    entries: List[FileEntry] = []

    def _walk(directory: Path) -> None:
        try:
            children = sorted(directory.iterdir())
        except OSError as e:
            raise WalkError(f"Could not list directory '{directory}': {e}") from e

        for child in children:
            rel = child.relative_to(root).as_posix()
            if child.is_symlink():
                _detail(f"[SKIP] Symbolic link: {rel}", Fore.YELLOW)
            elif child.is_dir():
                if selection.descends(rel):
                    _walk(child)
                else:
                    _detail(f"[IGNORE] Directory: {rel}/", Fore.YELLOW)
            elif child.is_file():
                if not selection.includes(rel):
                    _detail(f"[{selection.label}] {rel}", Fore.YELLOW)
                elif classifier(child):
                    entries.append(FileEntry(f"./{rel}", child))
                    _detail(f"[ALLOW] {rel}")
                else:
                    _detail(f"[SKIP] Binary (or non-text) file: {rel}", Fore.YELLOW)

    _walk(root)
    return sorted(entries, key=_sort_key)


def read_entry(entry: FileEntry) -> ReadResult:
    try:
        raw = entry.abs_path.read_bytes()
    except OSError as e:
        return ReadResult(error=str(e))
    return ReadResult(content=raw.decode("utf-8", errors="replace"))


def format_block(display_path: str, result: ReadResult) -> str:
    if not result.ok:
        return (
            f"{display_path}:\n"
            f"{DEFAULT_FENCE}\n"
            f"Error reading file: {result.error}\n"
            f"{DEFAULT_FENCE}\n\n"
        )
    content = result.content or ""
    fence = choose_fence(content)
    if not content.endswith("\n"):
        content += "\n"
    return f"{display_path}:\n{fence}\n{content}{fence}\n\n"


def assemble(entries: List[FileEntry], console: Optional["Console"] = None) -> str:
    """Render *entries*, in the given order, as one Markdown document.

    A file that can no longer be read becomes an error block; the rest of
    the document is still produced.
    """
    parts: List[str] = []
    for entry in entries:
        result = read_entry(entry)
        if not result.ok and console is not None:
            console.error(f"Error processing file ({entry.abs_path}): {result.error}")
        parts.append(format_block(entry.display_path, result))
    return "".join(parts)


def merge(config: "MergeConfig", console: Optional["Console"] = None) -> MergeResult:
    entries = walk(config.root, config.selection, console=console)
    if console is not None:
        console.detail(f"{len(entries)} files selected.")
    document = assemble(entries, console=console)
    delivery = deliver(
        document,
        config.destination,
        fallback_path=config.fallback_path,
        console=console,
    )
    return MergeResult(document=document, entries=entries, delivery=delivery)
