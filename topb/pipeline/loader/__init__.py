"""
Loader module.

Discovery strategies that find input files, and the DeclarationLoader
that turns them into SourceUnits.
"""

from __future__ import annotations

from pathlib import Path

from ..config import CodeGeneratorConfig, DiscoveryMode
from ..source_ast import GoSourceParser, SourceUnit
from .base import DiscoveryStrategy, SourceTarget
from .directive import DirectiveDiscovery
from .explicit import ExplicitDiscovery


class DeclarationLoader:
    """Finds input files and parses them, using the configured discovery strategy."""

    def __init__(self, config: CodeGeneratorConfig, parser: GoSourceParser | None = None):
        self.config = config
        self.parser = parser or GoSourceParser()
        self.strategy = self._create_strategy()

    def _create_strategy(self) -> DiscoveryStrategy:
        prefix = self.config.output.file_prefix
        if self.config.discovery == DiscoveryMode.DIRECTIVE:
            return DirectiveDiscovery(prefix, self.config.directive_tool)
        return ExplicitDiscovery(prefix)

    def discover(self, paths: list[Path]) -> list[SourceTarget]:
        return self.strategy.discover(paths)

    def load(self, target: SourceTarget) -> SourceUnit:
        """Parse one target. Raises LoadError (or ParseError)."""
        return self.parser.parse_file(target.path)


__all__ = [
    "DeclarationLoader",
    "DiscoveryStrategy",
    "SourceTarget",
    "ExplicitDiscovery",
    "DirectiveDiscovery",
]
