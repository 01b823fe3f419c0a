"""
Annotation matching: which declarations request a conversion method.
"""

from __future__ import annotations

from ..source_ast import SourceUnit, TypeDeclaration


class AnnotationMatcher:
    """Selects struct types whose doc comment contains the marker."""

    def __init__(self, marker: str = "gen:topb"):
        self.marker = marker

    def is_eligible(self, declaration: TypeDeclaration) -> bool:
        if not declaration.is_struct:
            return False
        doc = declaration.effective_doc
        return doc is not None and doc.contains(self.marker)

    def eligible(self, unit: SourceUnit) -> list[TypeDeclaration]:
        return [decl for decl in unit.declarations if self.is_eligible(decl)]
