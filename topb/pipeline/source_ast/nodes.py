"""
Declaration model for parsed Go source.

Only the parts of a Go file the generator looks at are kept: the package
name, and every type declaration with its fields and doc comments.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class CommentGroup:
    """Consecutive comments attached to a declaration.

    Each entry keeps its delimiters (``//`` or ``/* */``), as written.
    """

    comments: list[str] = field(default_factory=list)
    line: int = 0  # 1-based line of the first comment

    def contains(self, token: str) -> bool:
        return any(token in comment for comment in self.comments)


@dataclass
class Field:
    """A struct field.

    Embedded fields have no name; ``implicit_name`` holds the name Go gives
    them (the unqualified type name).
    """

    name: str | None = None
    type_text: str = ""
    embedded: bool = False
    implicit_name: str | None = None


@dataclass
class TypeDeclaration:
    """A named type declared at the top level of a file."""

    name: str = ""
    kind: str = ""  # "struct", "interface", "alias", or the grammar node type
    fields: list[Field] = field(default_factory=list)

    # Doc comment of the spec itself (only inside a "type ( ... )" group)
    doc: CommentGroup | None = None

    # Doc comment of the enclosing "type" declaration
    group_doc: CommentGroup | None = None

    type_parameters: list[str] = field(default_factory=list)
    line: int = 0

    @property
    def is_struct(self) -> bool:
        return self.kind == "struct"

    @property
    def effective_doc(self) -> CommentGroup | None:
        """Type-level documentation, falling back to the group's."""
        return self.doc if self.doc is not None else self.group_doc


@dataclass
class SourceUnit:
    """One parsed input file."""

    path: Path
    package_name: str = ""
    declarations: list[TypeDeclaration] = field(default_factory=list)
