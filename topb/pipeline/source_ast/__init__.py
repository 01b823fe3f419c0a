"""
Source AST module.

Contains the declaration model and the tree-sitter based Go parser.
"""

from __future__ import annotations

from .nodes import CommentGroup, Field, SourceUnit, TypeDeclaration
from .parser import GoSourceParser

__all__ = [
    "CommentGroup",
    "Field",
    "TypeDeclaration",
    "SourceUnit",
    "GoSourceParser",
]
