"""topb

Generates ToPb() conversion methods for Go structs annotated with
``gen:topb``, copying every field into the same-named type of a wire
(protobuf) package.
"""

__version__ = "1.0.0"

from .pipeline import (
    CodeGeneratorConfig,
    DiscoveryMode,
    EmbeddedFieldPolicy,
    FileReport,
    PipelineGenerator,
    ReportStatus,
    TopbError,
)

__all__ = [
    "PipelineGenerator",
    "CodeGeneratorConfig",
    "DiscoveryMode",
    "EmbeddedFieldPolicy",
    "FileReport",
    "ReportStatus",
    "TopbError",
]
