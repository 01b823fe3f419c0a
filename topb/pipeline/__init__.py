"""
Pipeline - annotated Go struct to ToPb() method generator.

The pipeline runs in phases for each input file:

1. Phase 1 (Loader/Parser): Discover input files and parse them with tree-sitter
2. Phase 2 (Analyzer): Select annotated structs and build the IR
3. Phase 3 (Backend): Render Go source from jinja2 templates
4. Phase 4 (Formatter): Optional post-processing with gofmt
5. Phase 5 (Writer): Atomically write autogen_topb_<name>.go next to the input
"""

from __future__ import annotations

from .config import (
    CodeGeneratorConfig,
    DiscoveryMode,
    EmbeddedFieldPolicy,
    FormatterConfig,
    OutputConfig,
)
from .errors import (
    ConfigError,
    EmissionError,
    LoadError,
    ParseError,
    TopbError,
    WriteError,
)
from .generator import FileReport, PipelineGenerator, ReportStatus
from .writer import AtomicWriter, output_path_for

__all__ = [
    "PipelineGenerator",
    "FileReport",
    "ReportStatus",
    "CodeGeneratorConfig",
    "DiscoveryMode",
    "EmbeddedFieldPolicy",
    "FormatterConfig",
    "OutputConfig",
    "TopbError",
    "LoadError",
    "ParseError",
    "EmissionError",
    "WriteError",
    "ConfigError",
    "AtomicWriter",
    "output_path_for",
]
