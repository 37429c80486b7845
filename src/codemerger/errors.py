"""
Exceptions raised by codemerger.
"""


class CodemergerError(Exception):
    """Base exception for codemerger errors."""


class InvalidRootError(CodemergerError):
    """Raised when the source folder is missing or not a directory."""


class ConfigFileError(CodemergerError):
    """Raised when an ignore pattern file cannot be read."""


class WalkError(CodemergerError):
    """Raised when a directory cannot be listed during traversal."""


class OutputError(CodemergerError):
    """Raised when the merged document cannot be written."""
