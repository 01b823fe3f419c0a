"""
Pipeline driver.

Runs every phase for each input file and reports one result per file.
A failing file never stops the others.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from ..logging_utils import get_logger
from .analyzer import ConversionAnalyzer, GeneratedArtifact
from .backends import GoBackend
from .config import CodeGeneratorConfig
from .errors import ConfigError, TopbError
from .formatters import GofmtFormatter
from .loader import DeclarationLoader, SourceTarget
from .source_ast import SourceUnit
from .writer import AtomicWriter, output_path_for

logger = get_logger("generator")


class ReportStatus(str, Enum):
    """Outcome for one input file."""

    WRITTEN = "written"  # Output created or replaced
    UNCHANGED = "unchanged"  # Output already up to date
    SKIPPED = "skipped"  # No eligible type, nothing written
    PRUNED = "pruned"  # No eligible type, stale output removed
    FAILED = "failed"


@dataclass
class FileReport:
    """Result of processing one input file."""

    source: Path
    status: ReportStatus
    output: Path | None = None
    error: str | None = None
    types: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status != ReportStatus.FAILED


class PipelineGenerator:
    """Generates conversion methods for every input file of a run."""

    def __init__(self, config: CodeGeneratorConfig | None = None):
        self.config = config or CodeGeneratorConfig()
        self.loader = DeclarationLoader(self.config)
        self.analyzer = ConversionAnalyzer(self.config)
        self.backend = GoBackend(self.config)
        self.formatter = GofmtFormatter()
        self.writer = AtomicWriter()

    def run(self, paths: list[Path] | None = None) -> list[FileReport]:
        """
        Process every input found from the given paths.

        Args:
            paths: Files or directories (explicit mode), or roots to walk (directive mode)

        Returns:
            One report per input file, in discovery order
        """
        targets = self.loader.discover(list(paths or []))
        logger.debug("Found %d input file(s)", len(targets))
        return [self.process(target) for target in targets]

    def process(self, target: SourceTarget) -> FileReport:
        """Process one input file, turning errors into a failed report."""
        try:
            return self._process(target)
        except TopbError as e:
            logger.debug("Failed to process %s", target.path, exc_info=True)
            return FileReport(source=target.path, status=ReportStatus.FAILED, error=str(e))

    def _process(self, target: SourceTarget) -> FileReport:
        output = output_path_for(target.path, self.config.output.file_prefix)
        unit = self.loader.load(target)
        rendered = self._render(unit, target.wire_package)

        if rendered is None:
            if self.config.output.prune_stale and self.writer.remove(output):
                logger.debug("Removed stale output %s", output)
                return FileReport(source=target.path, status=ReportStatus.PRUNED, output=output)
            return FileReport(source=target.path, status=ReportStatus.SKIPPED)

        artifact, code = rendered
        written = self.writer.write(output, code, validate=self.config.output.validate_before_write)
        return FileReport(
            source=target.path,
            status=ReportStatus.WRITTEN if written else ReportStatus.UNCHANGED,
            output=output,
            types=artifact.type_names,
        )

    def generate_source(self, unit: SourceUnit, wire_package: str | None = None) -> str | None:
        """
        Generate the output text for a parsed unit without writing it.

        Args:
            unit: The parsed input file
            wire_package: Wire import path, defaults to the configured one

        Returns:
            Generated Go source, or None if the unit has no eligible type
        """
        rendered = self._render(unit, wire_package)
        return rendered[1] if rendered is not None else None

    def _render(self, unit: SourceUnit, wire_package: str | None) -> tuple[GeneratedArtifact, str] | None:
        wire = wire_package or self.config.wire_package
        artifact = self.analyzer.analyze(unit, wire)
        if artifact is None:
            return None
        if not wire:
            raise ConfigError(f"{unit.path}: no wire package import path (set --pb or a -pb directive argument)")

        code = self.backend.generate(artifact)
        if self.config.formatter.enabled:
            code = self.formatter.format(code, self.config.formatter)
        return artifact, code
