"""
CLI entrypoint for codemerger package.
"""
import argparse
import sys
from importlib.resources import files
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import build_config
from .console import Console
from .core import merge
from .errors import CodemergerError

DEFAULT_IGNORE_NAME = ".mergeignore"

EPILOG = """\
Examples:
  $ codemerger .
  $ codemerger src output.md
  $ codemerger . -c
  $ codemerger . result.md -i .gitignore
  $ codemerger src out.md -v
  $ codemerger src -c -a "*.py"
  $ codemerger init
"""


def _parse_args(argv: List[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="codemerger",
        description="A tool to merge directory files into a single Markdown document.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("folder", type=Path, help="Source folder path to merge")
    p.add_argument(
        "output",
        type=Path,
        nargs="?",
        help="Output file path (defaults to clipboard)",
    )
    p.add_argument(
        "-i",
        "--ignore",
        type=Path,
        metavar="FILE",
        help="Ignore pattern file (like .gitignore)",
    )
    p.add_argument(
        "-l",
        "--inline-ignore",
        nargs="+",
        default=[],
        metavar="PATTERN",
        help="Space-separated ignore patterns (skip matched)",
    )
    p.add_argument(
        "-a",
        "--allow",
        nargs="+",
        default=[],
        metavar="PATTERN",
        help="Space-separated allow patterns (include only matched)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Show detailed processing logs")
    p.add_argument(
        "-c",
        "--clipboard",
        action="store_true",
        help="Copy output to clipboard (ignores output arg)",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p.parse_args(argv)


def _parse_init_args(argv: List[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="codemerger init",
        description="Create a default ignore pattern file",
    )
    p.add_argument(
        "filename",
        type=Path,
        nargs="?",
        default=Path(DEFAULT_IGNORE_NAME),
        help=f"Ignore file name (default: {DEFAULT_IGNORE_NAME})",
    )
    return p.parse_args(argv)


def sample_ignore_text() -> str:
    return (files("codemerger") / "templates" / "default.mergeignore").read_text(
        encoding="utf-8"
    )


def create_sample_ignore(file_path: Path, console: Console) -> bool:
    try:
        file_path.write_text(sample_ignore_text(), encoding="utf-8")
    except OSError as e:
        console.error(f"Error creating ignore file: {e}")
        return False
    console.success(f"Sample ignore file created: {file_path}")
    return True


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    try:
        if argv and argv[0] == "init":
            ns = _parse_init_args(argv[1:])
            ok = create_sample_ignore(ns.filename.resolve(), Console())
            return 0 if ok else 1

        ns = _parse_args(argv)
        console = Console(verbose=ns.verbose)
        config = build_config(
            ns.folder,
            output=ns.output,
            ignore_file=ns.ignore,
            inline_ignore=ns.inline_ignore,
            allow=ns.allow,
            verbose=ns.verbose,
            clipboard=ns.clipboard,
            console=console,
        )
        try:
            merge(config, console)
        except CodemergerError as e:
            console.error(f"Error: {e}")
            return 1

    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
