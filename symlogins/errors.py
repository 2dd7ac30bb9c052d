"""Exception types shared by the collector, parser and CLI."""

from typing import Optional


class SymLoginsError(Exception):
    """Base class for all symlogins errors."""


class PathNotFoundError(SymLoginsError):
    """An input path did not resolve to a file."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Path not found: {path}")


class NoInputError(SymLoginsError):
    """No input files were resolved at all."""

    def __init__(self, patterns=None):
        self.patterns = list(patterns or [])
        shown = ", ".join(self.patterns) if self.patterns else "(none)"
        super().__init__(f"No matching login report files for: {shown}")


class ParseFormatError(SymLoginsError):
    """A value expected to be numeric was not."""

    def __init__(self, source_file: str, line: str, value: str):
        self.source_file = source_file
        self.line = line
        self.value = value
        super().__init__(f"{source_file}: expected an integer in {line!r}, got {value!r}")


class CollectorError(SymLoginsError):
    """Exception raised when a collector fails to collect data."""

    def __init__(self, collector_name: str, message: str, cause: Optional[Exception] = None):
        self.collector_name = collector_name
        self.cause = cause
        super().__init__(f"[{collector_name}] {message}")


class ExternalToolError(CollectorError):
    """The external array CLI could not be located or invoked."""


class ToolNotFoundError(ExternalToolError):
    """The external array CLI is not installed or not on the search path."""
