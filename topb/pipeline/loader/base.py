"""
Base class for input discovery strategies.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

GO_SUFFIX = ".go"


@dataclass(frozen=True)
class SourceTarget:
    """An input file to process.

    Attributes:
        path: The Go file to scan for annotated types
        wire_package: Wire package import path requested for this file, if any
    """

    path: Path
    wire_package: str | None = None


class DiscoveryStrategy(ABC):
    """Finds the input files of a run."""

    def __init__(self, output_prefix: str):
        """
        Args:
            output_prefix: File name prefix of generated outputs, which are never inputs
        """
        self.output_prefix = output_prefix

    @abstractmethod
    def discover(self, paths: list[Path]) -> list[SourceTarget]:
        """
        Find input files.

        Args:
            paths: Paths given by the caller (files or directories)

        Returns:
            Targets in processing order, without duplicates
        """

    def is_generated(self, path: Path) -> bool:
        """Check if a file is the output of a previous run."""
        return path.name.startswith(self.output_prefix)

    def is_go_source(self, path: Path) -> bool:
        return path.suffix == GO_SUFFIX and path.is_file() and not self.is_generated(path)
