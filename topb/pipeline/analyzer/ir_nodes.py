"""
IR (Intermediate Representation) node definitions.

These nodes describe the file to generate, with every naming decision
already made, ready for the backend to render.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ConversionMethod:
    """A ToPb-style method for one struct."""

    type_name: str = ""
    receiver: str = "m"
    method_name: str = "ToPb"
    wire_alias: str = "pb"

    # Wire field names, in declaration order; each is copied from the same-named field
    field_names: list[str] = field(default_factory=list)


@dataclass
class GeneratedArtifact:
    """The complete content of one generated file."""

    package_name: str = ""
    wire_import: str = ""

    # Alias written in the import line, empty when the package name already matches
    import_alias: str = ""

    methods: list[ConversionMethod] = field(default_factory=list)

    # Generation comment, empty for none
    header: str = ""

    @property
    def type_names(self) -> list[str]:
        return [method.type_name for method in self.methods]
