"""
Codemerger - merge a directory's source files into one Markdown document.

This package walks a directory tree, selects files with gitignore-style
ignore or allow patterns, keeps only text files, and writes every selected
file as a fenced code block under its ``./relative/path:`` header, either
to the clipboard or to an output file.
"""

__version__ = "1.0.0"
__author__ = "Codemerger Team"
