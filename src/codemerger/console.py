"""
Colored status output for the command line.
"""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from colorama import Fore, Style, init as colorama_init

colorama_init()


class Console:
    """Prints colored status lines; ``detail`` only shows when verbose.

    Status goes to stdout, warnings and errors to stderr. The merged
    document itself is never written here.
    """

    def __init__(
        self,
        verbose: bool = False,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
    ) -> None:
        self.verbose = verbose
        self._out = out
        self._err = err

    def _emit(self, color: str, msg: str, stream: Optional[TextIO], fallback: str) -> None:
        # Resolve sys streams lazily so redirected stdout/stderr are honoured.
        target = stream if stream is not None else getattr(sys, fallback)
        print(color + msg + Style.RESET_ALL, file=target)

    def info(self, msg: str) -> None:
        self._emit(Fore.CYAN, msg, self._out, "stdout")

    def success(self, msg: str) -> None:
        self._emit(Fore.GREEN, msg, self._out, "stdout")

    def detail(self, msg: str, color: str = Fore.GREEN) -> None:
        if self.verbose:
            self._emit(color, msg, self._out, "stdout")

    def warning(self, msg: str) -> None:
        self._emit(Fore.YELLOW, msg, self._err, "stderr")

    def error(self, msg: str) -> None:
        self._emit(Fore.RED, msg, self._err, "stderr")

    def blank(self) -> None:
        if self.verbose:
            print(file=self._out if self._out is not None else sys.stdout)
