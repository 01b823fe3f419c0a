"""
Formatters for post-processing generated code.
"""

from __future__ import annotations

from .base import Formatter
from .gofmt_formatter import GofmtFormatter

__all__ = ["Formatter", "GofmtFormatter"]
