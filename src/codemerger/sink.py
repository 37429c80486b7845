"""
Deliver the merged document to the clipboard or to a file.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

import pyperclip

from .errors import OutputError

if TYPE_CHECKING:
    from .console import Console

CLIPBOARD = "clipboard"

Destination = Union[str, Path]


@dataclass(frozen=True)
class Delivery:
    target: Destination
    fell_back: bool = False


def write_output(document: str, out_path: Path) -> Path:
    """Write *document* to *out_path* as UTF-8 (no BOM), replacing any old file."""
    try:
        out_path = Path(out_path).resolve()
    except (OSError, RuntimeError) as e:
        raise OutputError(f"Could not resolve output path '{out_path}': {e}")

    if not out_path.parent.exists():
        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputError(f"Could not create directory '{out_path.parent}': {e}")

    try:
        with out_path.open("w", encoding="utf-8", newline="\n") as out_fh:
            out_fh.write(document)
    except OSError as e:
        raise OutputError(f"Could not write output file '{out_path}': {e}")
    return out_path


def copy_to_clipboard(document: str) -> None:
    pyperclip.copy(document)


def deliver(
    document: str,
    destination: Destination,
    fallback_path: Optional[Path] = None,
    console: Optional["Console"] = None,
) -> Delivery:
    if destination == CLIPBOARD:
        try:
            copy_to_clipboard(document)
        except (pyperclip.PyperclipException, OSError) as e:
            if fallback_path is None:
                raise OutputError(f"Could not copy to clipboard: {e}")
            if console is not None:
                console.error(f"Error copying to clipboard: {e}")
            written = write_output(document, fallback_path)
            if console is not None:
                console.warning(
                    f"Fallback: Saved to file due to clipboard error: {written}"
                )
            return Delivery(target=written, fell_back=True)
        if console is not None:
            console.info("Code has been copied to clipboard!")
        return Delivery(target=CLIPBOARD)

    written = write_output(document, Path(destination))
    if console is not None:
        console.info(f"Code merge complete! Output file: {written}")
    return Delivery(target=written)
