"""
Go backend: renders conversion methods.

Phase 3 of the pipeline. Output uses tabs and one blank line between
top-level sections, and ends with a single newline.
"""

from __future__ import annotations

from dataclasses import asdict

from ..analyzer.ir_nodes import GeneratedArtifact
from .base import CodeBackend


class GoBackend(CodeBackend):
    """Renders a GeneratedArtifact to Go source."""

    TEMPLATE_LANG = "go"
    FILE_EXTENSION = "go"

    def generate(self, artifact: GeneratedArtifact) -> str:
        sections = [
            self.prefix_template.render(
                header=artifact.header,
                package_name=artifact.package_name,
                import_alias=artifact.import_alias,
                wire_import=artifact.wire_import,
            )
        ]
        for method in artifact.methods:
            sections.append(self.method_template.render(**asdict(method)))

        return "\n\n".join(section.strip("\n") for section in sections) + "\n"
