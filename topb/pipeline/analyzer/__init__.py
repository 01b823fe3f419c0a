"""
Analyzer module.

Contains annotation matching and IR building.
"""

from __future__ import annotations

from .analyzer import ConversionAnalyzer
from .ir_nodes import ConversionMethod, GeneratedArtifact
from .matcher import AnnotationMatcher

__all__ = [
    "AnnotationMatcher",
    "ConversionAnalyzer",
    "ConversionMethod",
    "GeneratedArtifact",
]
