"""
Configuration for the topb pipeline.

Values can be loaded from a JSON file (see ``CodeGeneratorConfig.from_dict``)
and overridden from the command line.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import ConfigError


class DiscoveryMode(str, Enum):
    """How input files are found."""

    EXPLICIT = "explicit"  # Paths given on the command line
    DIRECTIVE = "directive"  # //go:generate directives found by walking a tree


class EmbeddedFieldPolicy(str, Enum):
    """What to do with embedded (anonymous) struct fields."""

    ERROR = "error"  # Default: refuse to generate the type
    IMPLICIT = "implicit"  # Use the unqualified type name, as Go does
    SKIP = "skip"  # Leave the field out of the conversion


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        file_prefix: Prefix added to the input file name to build the output name
        validate_before_write: Whether to parse generated code before writing
        prune_stale: Whether to delete an old output when a file no longer has eligible types
    """

    file_prefix: str = "autogen_topb_"
    validate_before_write: bool = True
    prune_stale: bool = False


@dataclass
class FormatterConfig:
    """Configuration for post-processing with gofmt."""

    # Whether formatting is enabled
    enabled: bool = False

    # Formatter executable, read from stdin and written to stdout
    command: str = "gofmt"

    # Seconds before the formatter process is abandoned
    timeout: int = 30


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Substring that marks a struct's doc comment for generation
    marker: str = "gen:topb"

    # Import path of the wire (protobuf) package
    wire_package: str = ""

    # Identifier the wire package is referred to by in generated code
    wire_alias: str = "pb"

    # Name of the generated conversion method
    method_name: str = "ToPb"

    # Receiver variable used in generated methods
    receiver_name: str = "m"

    # Handling of embedded fields
    embedded_fields: EmbeddedFieldPolicy = EmbeddedFieldPolicy.ERROR

    # How inputs are discovered
    discovery: DiscoveryMode = DiscoveryMode.EXPLICIT

    # Tool name expected after //go:generate in directive mode
    directive_tool: str = "topb"

    # Add generation comment at top of file (None = only in directive mode)
    add_generation_comment: bool | None = None

    # Text of the generation comment
    generation_comment: str = "// Code generated by topb. DO NOT EDIT."

    output: OutputConfig = field(default_factory=OutputConfig)
    formatter: FormatterConfig = field(default_factory=FormatterConfig)

    def wants_generation_comment(self) -> bool:
        """Whether generated files start with the generation comment."""
        if self.add_generation_comment is None:
            return self.discovery == DiscoveryMode.DIRECTIVE
        return self.add_generation_comment

    @staticmethod
    def from_dict(d: dict[str, Any]) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        if not isinstance(d, dict):
            raise ConfigError(f"configuration must be an object, got {type(d).__name__}")
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "output":
                config.output = _update_dataclass(OutputConfig(), v, "output")
            elif k == "formatter":
                config.formatter = _update_dataclass(FormatterConfig(), v, "formatter")
            elif k == "embedded_fields":
                config.embedded_fields = _to_enum(EmbeddedFieldPolicy, v, k)
            elif k == "discovery":
                config.discovery = _to_enum(DiscoveryMode, v, k)
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a dictionary."""
        return {
            "marker": self.marker,
            "wire_package": self.wire_package,
            "wire_alias": self.wire_alias,
            "method_name": self.method_name,
            "receiver_name": self.receiver_name,
            "embedded_fields": self.embedded_fields.value,
            "discovery": self.discovery.value,
            "directive_tool": self.directive_tool,
            "add_generation_comment": self.add_generation_comment,
            "generation_comment": self.generation_comment,
            "output": {
                "file_prefix": self.output.file_prefix,
                "validate_before_write": self.output.validate_before_write,
                "prune_stale": self.output.prune_stale,
            },
            "formatter": {
                "enabled": self.formatter.enabled,
                "command": self.formatter.command,
                "timeout": self.formatter.timeout,
            },
        }


def _to_enum(enum_cls: type[Enum], value: Any, key: str) -> Any:
    try:
        return enum_cls(value)
    except ValueError as e:
        choices = ", ".join(member.value for member in enum_cls)
        raise ConfigError(f"Invalid value {value!r} for {key!r} (expected one of: {choices})") from e


def _update_dataclass(target: Any, values: Any, key: str) -> Any:
    if not isinstance(values, dict):
        raise ConfigError(f"{key!r} must be an object, got {type(values).__name__}")
    for k, v in values.items():
        if hasattr(target, k):
            setattr(target, k, v)
    return target
