"""
Errors raised by the topb pipeline.

Every error is reported for the file being processed; none of them stops
the processing of other files.
"""

from __future__ import annotations

from pathlib import Path


class TopbError(Exception):
    """Base class for all pipeline errors."""

    pass


class LoadError(TopbError):
    """Raised when an input file cannot be read."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


class ParseError(LoadError):
    """Raised when an input file is not syntactically valid Go.

    Attributes:
        line: 1-based line of the first syntax error
        column: 1-based column of the first syntax error
    """

    def __init__(self, message: str, path: Path | None = None, line: int = 0, column: int = 0):
        super().__init__(message, path)
        self.line = line
        self.column = column


class EmissionError(TopbError):
    """Raised when a conversion method cannot be generated.

    This can happen when:
    - An eligible struct has an embedded field and the policy is "error"
    - An eligible struct is generic
    - The generated code does not parse back as Go
    """

    pass


class WriteError(TopbError):
    """Raised when an output file cannot be written or removed."""

    pass


class ConfigError(TopbError):
    """Raised for invalid or incomplete configuration."""

    pass
