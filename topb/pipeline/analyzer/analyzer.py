"""
Conversion analyzer.

Phase 2 of the pipeline: select the eligible declarations of a unit and
build the IR of the file to generate.
"""

from __future__ import annotations

import posixpath

from ...logging_utils import get_logger
from ..config import CodeGeneratorConfig, EmbeddedFieldPolicy
from ..errors import EmissionError
from ..source_ast import Field, SourceUnit, TypeDeclaration
from .ir_nodes import ConversionMethod, GeneratedArtifact
from .matcher import AnnotationMatcher

logger = get_logger("analyzer")


class ConversionAnalyzer:
    """Builds a GeneratedArtifact from a SourceUnit."""

    def __init__(self, config: CodeGeneratorConfig):
        self.config = config
        self.matcher = AnnotationMatcher(config.marker)

    def analyze(self, unit: SourceUnit, wire_package: str) -> GeneratedArtifact | None:
        """
        Build the artifact for a unit.

        Args:
            unit: The parsed input file
            wire_package: Import path of the wire package

        Returns:
            The artifact, or None if the unit has no eligible type

        Raises:
            EmissionError: If an eligible type cannot be converted
        """
        eligible = self.matcher.eligible(unit)
        if not eligible:
            return None

        logger.debug("%s: eligible types %s", unit.path, ", ".join(d.name for d in eligible))

        alias = self.config.wire_alias
        return GeneratedArtifact(
            package_name=unit.package_name,
            wire_import=wire_package,
            import_alias="" if posixpath.basename(wire_package) == alias else alias,
            methods=[self._build_method(decl, unit) for decl in eligible],
            header=self.config.generation_comment if self.config.wants_generation_comment() else "",
        )

    def _build_method(self, declaration: TypeDeclaration, unit: SourceUnit) -> ConversionMethod:
        if declaration.type_parameters:
            raise EmissionError(
                f"{unit.path}:{declaration.line}: generic type {declaration.name} is not supported"
            )

        field_names = []
        for field in declaration.fields:
            name = self._field_name(field, declaration, unit)
            if name is not None:
                field_names.append(name)

        return ConversionMethod(
            type_name=declaration.name,
            receiver=self.config.receiver_name,
            method_name=self.config.method_name,
            wire_alias=self.config.wire_alias,
            field_names=field_names,
        )

    def _field_name(self, field: Field, declaration: TypeDeclaration, unit: SourceUnit) -> str | None:
        if field.name == "_":
            # Blank fields cannot be referred to, neither as a key nor through the receiver
            logger.debug("%s: skipping blank field of type %s", declaration.name, field.type_text)
            return None
        if not field.embedded:
            return field.name

        policy = self.config.embedded_fields
        if policy == EmbeddedFieldPolicy.SKIP:
            logger.debug("%s: skipping embedded field %s", declaration.name, field.type_text)
            return None
        if policy == EmbeddedFieldPolicy.IMPLICIT and field.implicit_name:
            return field.implicit_name
        raise EmissionError(
            f"{unit.path}:{declaration.line}: type {declaration.name} embeds {field.type_text}; "
            f"embedded fields are not supported (embedded_fields policy: {policy.value})"
        )
